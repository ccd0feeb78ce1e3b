"""
Service-wide constants
"""

SERVICE_NAME = "extension-tracker-backend"

# Keys used on Session.info
OPERATION_CONTEXT_KEY = "operation_context"
AUDIT_WRITER_KEY = "audit_writer"
