"""REST gateway for the storage control plane."""

__version__ = '0.1.0'
