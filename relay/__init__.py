"""Push relay: dispatches queued push notifications to agent devices."""
