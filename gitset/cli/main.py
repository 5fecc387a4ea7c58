"""CLI Main Entry Point"""

from gitset.api import APIError, GitSetClient, QuotaExceededError, render_quota_exceeded
from gitset.config import Config, CredentialError, CredentialStore, load_config
from gitset.git import ChangeFilter, GitBackend, GitError, GitInspector, PayloadAssembler, StagedFile
from gitset.output import bold, warning, log_step, format_status, format_commit_message, Spinner, RULE, SPARKLE

from gitset.cli.args import parse_args
from gitset.cli.commands import run_activate, run_status, run_deactivate, run_help


def _display_file_list(files: list[StagedFile]) -> None:
    """Show which staged files will be sent, with a marker per status."""
    log_step('Files', 'Analyzing:')
    for staged in files:
        print(f"   {format_status(staged.status)}: {staged.path}")


def _display_message(message: str, mode: str) -> None:
    print(bold(f"Suggested message ({mode} mode):"))
    print(warning(RULE))
    print(format_commit_message(message))


def _resolve_options(args, config: Config) -> tuple[str, int, int | None]:
    """CLI flags win over settings."""
    mode = args.mode or config.mode
    commit_count = args.commit_count or config.commit_count
    max_lines = args.max_lines or config.max_file_lines
    return mode, commit_count, max_lines


def run_suggest(args, config: Config, client: GitSetClient, git: GitBackend | None = None) -> int:
    """Full generation flow: staged files -> payload -> service -> message."""
    mode, commit_count, max_lines = _resolve_options(args, config)

    try:
        log_step('Start', 'Starting commit message generation process...')
        if git is None:
            git = GitInspector()
            git.verify()

        assembler = PayloadAssembler(
            git,
            change_filter=ChangeFilter(max_lines=max_lines),
            fetch_workers=config.fetch_workers,
        )
        files = assembler.select(git.list_staged_files())
        if not files:
            log_step('Git', 'No files staged. Use `git add <file>` first.', is_error=True)
            return 0
        log_step('Git', f"Found {len(files)} staged files")
        _display_file_list(files)

        change_set = assembler.assemble(files, mode=mode, commit_count=commit_count)
        if change_set.is_empty:
            log_step('Diff', 'Could not read any of the staged files', is_error=True)
            return 1

        log_step('API', f"Processing diffs with AI using {mode} mode...")
        with Spinner():
            result = client.generate_commit_message(change_set)
        log_step('Success', f"{SPARKLE} Commit message generated\n")

        _display_message(result.commit_message, mode)
        return 0
    except (GitError, APIError, CredentialError) as e:
        log_step('Error', str(e), is_error=True)
        if 'permission denied' in str(e).lower():
            log_step('Help', 'Make sure you have the necessary permissions and are in a git repository.')
        return 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    # Static text, no config or credentials needed
    if args.command == 'help':
        return run_help()

    config = load_config()
    store = CredentialStore()
    client = GitSetClient(store, base_url=config.api_url, timeout=config.timeout)

    try:
        if args.command == 'activate':
            return run_activate(store, client, args.license_key)
        if args.command == 'status':
            return run_status(store, client)
        if args.command == 'deactivate':
            return run_deactivate(store)
        return run_suggest(args, config, client)
    except QuotaExceededError as e:
        # Spinner has already been torn down by the time we get here
        render_quota_exceeded(e.quota)
        raise
