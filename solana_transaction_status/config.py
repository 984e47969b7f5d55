import os

# Log level
LOG_LEVEL = os.environ.get("TX_STATUS_LOG_LEVEL", "INFO")

# Encoding used by the CLI when --to is not given
DEFAULT_ENCODING = os.environ.get("TX_STATUS_DEFAULT_ENCODING", "json")

# Well-known program ids
SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
MEMO_V1_PROGRAM_ID = "Memo1UhkJRfHyvLMcVucJwxXeuD728EqVDDwQDxFMNo"
MEMO_PROGRAM_ID = "MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr"
