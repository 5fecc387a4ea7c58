"""
GitSet CLI

AI-powered commit message suggestions from staged git changes.
"""

__version__ = "1.1.0"

API_URL = "https://gitset-commit-messages.vercel.app"
PRICING_URL = "https://gitset.dev/pricing"
ACCOUNT_URL = "https://gitset.dev/account"

# Generation modes understood by the remote service
MODES = {
    'semantic': 'Conventional, meaning-focused commit message',
    'custom': 'Mimic the style of recent commit subjects',
}

MODE_NAMES = list(MODES.keys())

# Free tier allowance, shown in guidance text only; the service enforces it
FREE_TIER_REQUESTS = 10
