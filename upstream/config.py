import os

# --- Config ---
UPSTREAM_ADDR = os.getenv("UPSTREAM_ADDR", ":8081")
LOG_LEVEL = os.getenv("LOG_LEVEL", "info")
RESOURCE_COUNT = int(os.getenv("RESOURCE_COUNT", "100"))
RESOURCE_DEFAULT_LIMIT = int(os.getenv("RESOURCE_DEFAULT_LIMIT", "10"))
RESOURCE_NAME_LENGTH = int(os.getenv("RESOURCE_NAME_LENGTH", "10"))


def get_env_vars():
    return {
        "UPSTREAM_ADDR": UPSTREAM_ADDR,
        "LOG_LEVEL": LOG_LEVEL,
        "RESOURCE_COUNT": RESOURCE_COUNT,
        "RESOURCE_DEFAULT_LIMIT": RESOURCE_DEFAULT_LIMIT,
        "RESOURCE_NAME_LENGTH": RESOURCE_NAME_LENGTH,
    }
