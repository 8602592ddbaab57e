from setuptools import setup, find_packages

setup(
    name="storage-rest-gateway",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages("src", include=["rest_gateway", "rest_gateway.*"]),
    install_requires=[
        "aiohttp>=3.9.0",
        "python-dotenv>=1.0.0",
        "prometheus_client>=0.17.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "rest-gateway=rest_gateway.app:main",
        ],
    },
    python_requires=">=3.8",
)
