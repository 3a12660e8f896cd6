"""Canned events for demos and tests."""

# Passes every default rule
VALID_EVENT = {
    "event_name": "user.login",
    "user_id": 123,
    "timestamp": "2025-11-22T15:00:00Z",
    "environment": "prod",
    "source": "web",
    "action_type": "LOGIN",
}

# Breaks every rule family at least once: camelCase key, string user_id,
# non-ISO timestamp, missing event_name/environment, bad action_type
BROKEN_EVENT = {
    "eventName": "user.login",
    "user_id": "123",
    "timestamp": "2025/11/22 15:00",
    "env": "production",
    "action_type": "LOGIN-FAILED",
}

EXAMPLES = {
    "valid": VALID_EVENT,
    "broken": BROKEN_EVENT,
}
