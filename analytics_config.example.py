"""
Analytics Configuration Example

Copy this file to 'analytics_config.py' and fill in your server details.
"""

# Analytics server root; requests are posted to <base>/submission/mobile-analytics
ANALYTICS_BASE_URL = 'https://your-server.com'

# Seconds to wait for the server before giving up on a submission
ANALYTICS_TIMEOUT = 5

# Telemetry settings
TELEMETRY_ENABLED_BY_DEFAULT = True
TELEMETRY_DEBUG = False
