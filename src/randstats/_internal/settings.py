import os

CLI_LOG_LEVEL = os.getenv("RANDSTATS_CLI_LOG_LEVEL", "WARNING").upper()

# Job limits
MAX_REQUESTS = 10
MAX_SEQUENCE_LENGTH = 1000
STD_DEV_DECIMALS = 3
