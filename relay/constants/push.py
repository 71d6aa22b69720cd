"""Push gateway and dispatch constants."""

# Dispatch batch
DEFAULT_BATCH_SIZE = 10
DEFAULT_MAX_RETRIES = 3

# Outcome messages written to push_notification_queue.error_message
NO_DEVICE_TOKENS_MESSAGE = "No device tokens found"
ALL_TOKENS_FAILED_MESSAGE = "All device tokens failed"
INVALID_DATA_MESSAGE = "Notification data must be a JSON object"

# Summary messages
NO_PENDING_NOTIFICATIONS_MESSAGE = "No pending notifications"
DISPATCH_IN_PROGRESS_MESSAGE = "Push dispatch already in progress"

# HTTP statuses the gateway uses to report a permanently invalid token
INVALID_TOKEN_STATUS_CODES = frozenset({400, 404})

# Characters of a device token kept in log output
TOKEN_LOG_PREFIX_LENGTH = 20

# Legacy (server key) FCM API
FCM_LEGACY_SEND_URL = "https://fcm.googleapis.com/fcm/send"
FCM_LEGACY_ICON = "ic_notification"

# FCM HTTP v1 API
FCM_BASE_URL = "https://fcm.googleapis.com"
FCM_MESSAGING_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
JWT_BEARER_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ASSERTION_LIFETIME_SECONDS = 3600
FCM_CLICK_ACTION = "FLUTTER_NOTIFICATION_CLICK"

DEFAULT_SOUND = "default"
DEFAULT_BADGE = 1
