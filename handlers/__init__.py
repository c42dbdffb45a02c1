"""
handlers/ - Presentation Layer
================================
Telegram bot handlers. Each handler parses the command arguments,
delegates to a Service, and sends the response back to the user.
No business logic lives here.
"""
