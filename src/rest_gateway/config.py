import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# REST server
REST_HOST = os.getenv('REST_HOST', '0.0.0.0')
REST_PORT = int(os.getenv('REST_PORT', 8080))
DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Message bus endpoint of the control plane
BUS_URL = os.getenv('BUS_URL', 'nats://0.0.0.0:4222')

# Nodes registered in the in-memory bus at startup
SEED_NODES = [node.strip() for node in os.getenv('SEED_NODES', '').split(',') if node.strip()]

# REST client
CLIENT_TIMEOUT = float(os.getenv('CLIENT_TIMEOUT', 30))
