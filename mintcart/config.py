import os


GZIP_MINIMUM_SIZE = int(os.getenv("GZIP_MINIMUM_SIZE", "1000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR")

# IPFS HTTP API (Infura-compatible)
IPFS_API_URL = os.getenv("IPFS_API_URL", "https://ipfs.infura.io:5001")
IPFS_PROJECT_ID = os.getenv("IPFS_PROJECT_ID")
IPFS_PROJECT_SECRET = os.getenv("IPFS_PROJECT_SECRET")
IPFS_GATEWAY_URL = os.getenv("IPFS_GATEWAY_URL", "https://ipfs.io/ipfs")
IPFS_TIMEOUT = float(os.getenv("IPFS_TIMEOUT", "30"))

# Product records backend
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")
BACKEND_TIMEOUT = float(os.getenv("BACKEND_TIMEOUT", "15"))

# Chain
SIGNER_PRIVATE_KEY = os.getenv("SIGNER_PRIVATE_KEY")
CONFIRMATIONS = int(os.getenv("CONFIRMATIONS", "1"))
CONFIRMATION_TIMEOUT = float(os.getenv("CONFIRMATION_TIMEOUT", "120"))
CONFIRMATION_POLL_LATENCY = float(os.getenv("CONFIRMATION_POLL_LATENCY", "1"))

STOREFRONT_URL = os.getenv("STOREFRONT_URL", "https://mintcart.xyz")
DASHBOARD_PATH = "/dashboard"
