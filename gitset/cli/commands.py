"""CLI Commands - License management and help."""

from datetime import datetime, timezone

from gitset import ACCOUNT_URL, FREE_TIER_REQUESTS, PRICING_URL
from gitset.api import APIError, GitSetClient
from gitset.config import CredentialError, CredentialStore
from gitset.output import bold, info, log_step, format_date, SPARKLE

HELP_TEXT = """
{title}

{usage}
  gitset suggest              Generate a commit message for staged changes
  gitset activate <key>       Activate GitSet with a license key
  gitset status               Check license status and usage
  gitset deactivate           Remove current license key
  gitset help                 Show this help message

{options}
  -m, --mode <mode>           Commit message mode (semantic or custom)
  -c, --commit-count <n>      Number of commits to analyze in custom mode
  --max-lines <n>             Skip files longer than n lines

{plans}
  Basic (Free)                {free} requests per month
  Pro                         Unlimited requests

{examples}
  $ gitset suggest                    Generate semantic commit message
  $ gitset suggest -m custom          Generate message matching your style
  $ gitset activate ABC123...         Activate pro license
  $ gitset status                     Check current license status

{learn}
  Visit https://gitset.dev for documentation and pricing
  Report issues at https://github.com/gitset/cli/issues
"""


def _print_free_tier_guidance(verb: str = 'can use') -> None:
    log_step('Info', f"You {verb} GitSet with limited features ({FREE_TIER_REQUESTS} requests/month)")
    log_step('Info', 'To unlock unlimited usage, activate a pro license:')
    log_step('Command', '  gitset activate <license-key>')
    log_step('Purchase', f"Visit {PRICING_URL} to get a license")


def run_activate(store: CredentialStore, client: GitSetClient, license_key: str | None) -> int:
    """Show the current license, or validate and store a new one."""
    try:
        if not license_key:
            record = store.load()
            if record.has_license:
                log_step('License', 'Current license status:')
                status = client.validate_license(record.license_key)
                log_step('Status', f"Plan: {status.product_name}")
                log_step('Status', f"Valid until: {format_date(status.renews_at)}")
            else:
                log_step('License', 'No license key configured', is_error=True)
                _print_free_tier_guidance()
            return 0

        status = client.validate_license(license_key)
        record = store.load()
        record.license_key = license_key
        record.last_validation = datetime.now(timezone.utc).isoformat()
        record.subscription_data = status.raw
        store.save(record)

        log_step('Success', f"{SPARKLE} License activated successfully!")
        log_step('Plan', status.product_name)
        log_step('Info', 'You now have unlimited access to all features')
        return 0
    except (APIError, CredentialError) as e:
        log_step('Error', str(e), is_error=True)
        return 1


def run_status(store: CredentialStore, client: GitSetClient) -> int:
    """Validate the stored key and report plan and usage."""
    try:
        record = store.load()
        if not record.has_license:
            log_step('License', 'No license key configured')
            _print_free_tier_guidance(verb='are using')
            return 0

        status = client.validate_license(record.license_key)
        log_step('License', f"License is active and valid {SPARKLE}")
        log_step('Plan', status.product_name)
        log_step('Status', status.status)
        if status.renews_at:
            log_step('Renewal', f"Next renewal: {format_date(status.renews_at)}")

        if status.is_pro:
            log_step('Usage', 'Unlimited requests (Pro Plan)')
        else:
            log_step('Usage', 'Request limits (Basic Plan):')
            usage = client.usage_info(record.license_key)
            log_step('Info', f"Used {usage.current_usage} of {usage.limit} monthly requests")
            log_step('Info', f"Reset date: {format_date(usage.next_reset_date)}")
        return 0
    except (APIError, CredentialError) as e:
        log_step('Error', str(e), is_error=True)
        if isinstance(e, APIError) and 'validation' in str(e).lower():
            log_step('Help', 'Your license might have expired or been deactivated')
            log_step('Info', f"You can check your subscription status at {ACCOUNT_URL}")
        return 1


def run_deactivate(store: CredentialStore) -> int:
    """Forget the license; the installation id stays."""
    try:
        record = store.load()
        if not record.has_license:
            log_step('Info', 'No active license found')
            return 0

        record.clear_license()
        store.save(record)
        log_step('Success', 'License deactivated successfully')
        log_step('Info', f"Switched to basic plan ({FREE_TIER_REQUESTS} requests/month)")
        log_step('Info', 'You can reactivate your license anytime with:')
        log_step('Command', '  gitset activate <license-key>')
        return 0
    except CredentialError as e:
        log_step('Error', str(e), is_error=True)
        return 1


def run_help() -> int:
    print(HELP_TEXT.format(
        title=bold('GitSet CLI - Smart AI Commit Messages'),
        usage=info('Usage:'),
        options=info("Options for 'suggest':"),
        plans=info('Plans:'),
        free=FREE_TIER_REQUESTS,
        examples=info('Examples:'),
        learn=info('Learn more:'),
    ))
    return 0
