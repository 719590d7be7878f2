SEPARATOR = "|"

DATE_FORMAT = "%m/%d/%Y %H:%M:%S"

DEFAULT_KEY_SIZE = 2048
DEFAULT_PUBLIC_EXPONENT = 65537
DEFAULT_TOKEN_LENGTH = 32
DEFAULT_SALT_LENGTH = 8

# seconds
DEFAULT_MAX_AGE = 300.0
DEFAULT_CLOCK_SKEW = 30.0

PADDING_PKCS1V15 = "pkcs1v15"
PADDING_OAEP = "oaep"
