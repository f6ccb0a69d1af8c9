import os

# Read by the configuration loader when the application modules are imported
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_FILE", "")

pytest_plugins = ["tests.fixtures"]
