"""
Heartbeat Infrastructure Layer

External integrations including the user database, call providers,
metrics and error tracking. All infrastructure components implement
abstract interfaces for testability.
"""
