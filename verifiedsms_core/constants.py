# verifiedsms_core/constants.py

__version__ = "0.1.0"

API_GET_PUBLIC_KEYS_URL = "https://verifiedsms.googleapis.com/v1/enabledUserKeys:batchGet"
API_SUBMIT_HASHES_URL = "https://verifiedsms.googleapis.com/v1/messages:batchCreate"
AUTH_SCOPE = "https://www.googleapis.com/auth/verifiedsms"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

CONTENT_TYPE = "application/json"
USER_AGENT = f"verifiedsms-core/{__version__}"

DEFAULT_CURVE = "secp384r1"
DEFAULT_HASH_LENGTH = 32
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_TRANSPORT = "http"
