"""Constants for the observability layer and the masking engine."""

# Service identifier for logs
SERVICE_NAME = "request-snapshot"


# Log event names following the pattern: {domain}.{action}.{result}
class LogEvents:
    """Standardized log event names."""

    # Snapshot lifecycle
    SNAPSHOT_CREATED = "snapshot.create.completed"
    SNAPSHOT_REJECTED = "snapshot.create.rejected"

    # Best-effort parse failures (field omitted, never raised)
    USER_SERIALIZATION_FAILED = "snapshot.user.serialize_failed"
    REQUEST_TIMESTAMP_INVALID = "snapshot.request.timestamp_invalid"
    RESPONSE_DATE_INVALID = "snapshot.response.date_invalid"
    RESPONSE_DURATION_INVALID = "snapshot.response.duration_invalid"
    RESPONSE_STATUS_LINE_INVALID = "snapshot.response.status_line_invalid"

    # Middleware
    REQUEST_SNAPSHOT = "request.snapshot.completed"
    REQUEST_SNAPSHOT_ERRORED = "request.snapshot.errored"
    REQUEST_SNAPSHOT_FAILED = "request.snapshot.failed"
    REQUEST_FORM_INVALID = "request.form.parse_failed"


# Character used to overwrite masked characters
MASK_CHAR = "*"

# Placeholder for subtrees deeper than the configured recursion limit
TRUNCATED_VALUE = "[Truncated]"

# Descriptor record type names
BUFFER_TYPE = "Buffer"
ARRAY_BUFFER_TYPE = "ArrayBuffer"
STREAM_TYPE = "Stream"

# Methods that never carry a loggable body
BODYLESS_METHODS = frozenset({"GET", "HEAD"})

DEFAULT_METHOD = "GET"

# Header names with special handling
AUTHORIZATION_HEADER = "authorization"
COOKIE_HEADER = "cookie"
REQUEST_ID_HEADER = "x-request-id"
DATE_HEADER = "date"
RESPONSE_TIME_HEADER = "x-response-time"
REFERRER_ALIASES = ("referer", "referrer")

# Keys that always denote a primary identifier
ID_FIELD_NAMES = frozenset({"_id", "id"})

# Request-received markers stamped by upstream middleware, checked in order.
# The first accepts a datetime or epoch seconds, the second epoch seconds only.
START_TIME_MARKERS = (
    ("request_received_start_time", True),
    ("pino_http_start_time", False),
    ("_start_time", True),
)

# Per-request opt-out flags set by framework adapters on the raw request
DISABLE_BODY_PARSING = "parse_request.disable_body_parsing"
DISABLE_QUERY_PARSING = "parse_request.disable_query_parsing"
DISABLE_FILE_PARSING = "parse_request.disable_file_parsing"

DEFAULT_SANITIZE_HEADERS = ("authorization",)

DEFAULT_USER_FIELDS = ("id", "email", "full_name", "ip_address")

# Field names redacted from bodies, queries and user records (exact match)
SENSITIVE_FIELDS = (
    # Authentication
    "password",
    "passwd",
    "pass",
    "pwd",
    "new_password",
    "old_password",
    "current_password",
    "confirm_password",
    "password_confirmation",
    "passwordConfirmation",
    "newPassword",
    "oldPassword",
    "currentPassword",
    "confirmPassword",
    "passcode",
    "pin",
    "otp",
    "secret",
    "secret_key",
    "secretKey",
    "client_secret",
    "clientSecret",
    "private_key",
    "privateKey",
    # Tokens
    "token",
    "access_token",
    "accessToken",
    "refresh_token",
    "refreshToken",
    "id_token",
    "auth_token",
    "authToken",
    "api_key",
    "apiKey",
    "apikey",
    "api_secret",
    "apiSecret",
    "bearer",
    "authorization",
    "auth",
    "session_id",
    "session_token",
    "csrf_token",
    "_csrf",
    "stripe_token",
    "stripeToken",
    # Payment cards
    "card",
    "card[number]",
    "card[cvc]",
    "card[exp_month]",
    "card[exp_year]",
    "card_number",
    "cardNumber",
    "credit_card",
    "creditCard",
    "credit_card_number",
    "creditCardNumber",
    "cc_number",
    "ccNumber",
    "cvc",
    "cvv",
    "cvv2",
    "exp_month",
    "exp_year",
    "expiration_date",
    # Banking
    "account_number",
    "accountNumber",
    "bank_account",
    "bank_account_number",
    "bankAccountNumber",
    "routing_number",
    "routingNumber",
    "iban",
    "swift",
    "bic",
    # Government identifiers
    "ssn",
    "social_security",
    "social_security_number",
    "socialSecurityNumber",
    "passport_number",
    "drivers_license",
    # Keys
    "encryption_key",
    "signing_key",
    "rsa_private_key",
)
