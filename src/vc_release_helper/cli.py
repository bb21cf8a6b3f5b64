"""
Command line interface for the vc_release_helper tool.

Two console scripts are defined here:

``version-control``
    Analyzes the last commit, suggests a semantic version bump, updates
    ``package.json``, the index ``@version`` tag and ``CHANGELOG.md``,
    then commits, tags and pushes the release. The ``config``
    subcommand manages the output language.

``smart-commit``
    Suggests a Conventional Commit message for the staged changes and
    creates the commit.

Exit codes: 0 on success or when the user cancels, 1 when a git
operation fails, the edited commit message is empty, or an
unexpected error occurs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import click

from vc_release_helper import __version__
from vc_release_helper.analysis.change_classifier import BumpLevel, ChangeAnalysis, analyze_last_commit
from vc_release_helper.analysis.commit_generator import FileChangeRecord, FileStatus, generate_commit_message
from vc_release_helper.config.loader import (
    SUPPORTED_LANGUAGES,
    ConfigError,
    clear_language,
    get_configured_language,
    set_language,
)
from vc_release_helper.i18n import (
    BUMP_EMOJIS,
    Language,
    describe_reason,
    no_answers,
    resolve_language,
    translate,
    yes_answers,
)
from vc_release_helper.release.updater import (
    ChangelogStatus,
    update_changelog,
    update_index_file,
    update_package_json,
)
from vc_release_helper.release.version import ReleaseError, bump_version, get_current_version
from vc_release_helper.vcs.git_client import GitClient, GitError, bump_commit_message

# Create a module-level logger. The null handler keeps library use quiet
# until configure_logging() installs a root handler; records then
# propagate to it at the level chosen by --verbose.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_FAILURE = 1

MAX_LISTED_COMMIT_FILES = 5
MAX_LISTED_STAGED_FILES = 10

LEVEL_CHOICES = {"1": BumpLevel.MAJOR, "2": BumpLevel.MINOR, "3": BumpLevel.PATCH}
LEVEL_COLORS = {BumpLevel.MAJOR: "red", BumpLevel.MINOR: "yellow", BumpLevel.PATCH: "green"}

STATUS_ICONS = {FileStatus.ADDED: "✨", FileStatus.DELETED: "🗑️"}


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_banner(title: str) -> None:
    click.echo("")
    click.echo(click.style("═" * 60, fg="cyan", bold=True))
    click.echo(click.style(title.center(60), fg="cyan", bold=True))
    click.echo(click.style("═" * 60, fg="cyan", bold=True))
    click.echo("")


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=False)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=False)


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}", err=False)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


def configure_logging(verbose: bool) -> None:
    # force=True so that handlers are reconfigured on every invocation
    # (important for tests). Progress is already echoed to the user, so
    # only warnings and errors are logged unless --verbose is given.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )


# ---------------------------------------------------------------------------
# Collaborator setup
# ---------------------------------------------------------------------------

def open_git_client(start: Path) -> GitClient:
    """Return a client for the repository containing ``start``."""
    repo_root = GitClient.find_repo_root(start) or start
    logger.debug("Using repository root: %s", repo_root)
    return GitClient(repo_root)


def current_language() -> Language:
    """Resolve the output language, ignoring a broken config file."""
    try:
        configured = get_configured_language()
    except ConfigError as exc:
        logger.warning("Ignoring invalid configuration: %s", exc)
        configured = None
    return resolve_language(configured)


def language_source(language: Language) -> str:
    try:
        configured = get_configured_language()
    except ConfigError:
        configured = None
    key = "configured_manually" if configured else "detected_from_system"
    return translate(key, language)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

def ask_yes_no(question: str, language: Language) -> bool:
    """Ask until the user gives one of the localized yes/no answers."""
    yes, no = yes_answers(language), no_answers(language)
    while True:
        answer = click.prompt(question, default="", show_default=False).strip().lower()
        if not answer:
            print_error(translate("please_enter_yes_no", language))
            continue
        if answer in yes:
            return True
        if answer in no:
            return False
        print_error(translate("invalid_response", language))


def ask_choice(question: str, valid: List[str], default: str, invalid_message: str) -> str:
    """Ask until the user picks one of ``valid``; empty input means ``default``."""
    while True:
        answer = click.prompt(question, default="", show_default=False).strip()
        if not answer:
            return default
        if answer in valid:
            return answer
        print_error(invalid_message)


# ---------------------------------------------------------------------------
# version-control flow
# ---------------------------------------------------------------------------

def show_analysis(analysis: ChangeAnalysis, language: Language) -> None:
    click.echo(click.style(translate("commit_message", language), bold=True))
    click.echo(f'  "{analysis.commit_message}"')
    click.echo("")

    click.echo(f"{click.style(translate('files_modified', language), bold=True)} {len(analysis.files_changed)}")
    for path in analysis.files_changed[:MAX_LISTED_COMMIT_FILES]:
        click.echo(f"  - {path}")
    remaining = len(analysis.files_changed) - MAX_LISTED_COMMIT_FILES
    if remaining > 0:
        click.echo(f"  {translate('and_more_files', language, count=remaining)}")
    click.echo("")

    click.echo(click.style(translate("change_analysis", language), bold=True))
    for reason in analysis.reasons:
        click.echo(f"  {describe_reason(reason, language)}")
    click.echo("")


def choose_bump_level(current: str, suggested: BumpLevel, language: Language) -> BumpLevel:
    click.echo(click.style(translate("confirm_version_type", language), bold=True))
    descriptions = {
        BumpLevel.MAJOR: translate("major_desc", language),
        BumpLevel.MINOR: translate("minor_desc", language),
        BumpLevel.PATCH: translate("patch_desc", language),
    }
    for key, level in LEVEL_CHOICES.items():
        number = click.style(key, fg=LEVEL_COLORS[level])
        click.echo(f"  {number} - {level.value.upper()} ({bump_version(current, level)}) - {descriptions[level]}")
    click.echo("")

    default = next(key for key, level in LEVEL_CHOICES.items() if level == suggested)
    choice = ask_choice(
        translate("choose", language, default=default),
        list(LEVEL_CHOICES),
        default,
        translate("invalid_option", language),
    )
    return LEVEL_CHOICES[choice]


def update_release_files(version: str, git: GitClient, project_root: Path, language: Language) -> None:
    """Rewrite package.json, the index @version tag and CHANGELOG.md."""
    update_package_json(version, project_root)
    print_success(translate("package_json_updated", language))

    index_path = update_index_file(version, project_root)
    if index_path is not None:
        print_success(translate("file_updated", language, name=index_path.name))

    result = update_changelog(version, git, project_root, language)
    if result.status == ChangelogStatus.NOT_FOUND:
        print_warning(translate("changelog_not_found", language))
    elif result.status == ChangelogStatus.NO_COMMITS:
        print_warning(translate("no_new_commits", language))
    else:
        print_success(translate("changelog_updated", language, count=result.commit_count))


def _step_message(args: List[str], language: Language) -> str:
    if args[0] == "push":
        return translate("step_push_tags" if "--tags" in args else "step_push", language)
    return translate(f"step_{args[0]}", language)


def publish(git: GitClient, version: str, language: Language) -> None:
    """Run the add/commit/tag/push sequence, printing progress.

    On failure the remaining steps are printed for the user to run by
    hand and the CLI exits with :data:`EXIT_FAILURE`.
    """
    click.echo(click.style(translate("executing_git_commands", language), bold=True))
    click.echo("")
    try:
        git.publish_release(version, on_step=lambda args: print_success(_step_message(args, language)))
    except GitError as exc:
        click.echo("")
        print_error(f"{translate('error_executing_git', language)} {exc}")
        click.echo("")
        click.echo(click.style(translate("execute_manually", language), bold=True))
        click.echo("  1. git add -A")
        click.echo(f'  2. git commit -m "{bump_commit_message(version)}"')
        click.echo(f"  3. git tag v{version}")
        click.echo("  4. git push && git push --tags")
        click.echo("")
        raise click.exceptions.Exit(EXIT_FAILURE)

    click.echo("")
    click.echo(click.style(f"✓ {translate('version_published', language, version=version)}", fg="green", bold=True))
    click.echo("")


def run_release_flow(language: Language) -> None:
    print_banner(translate("version_control", language))

    project_root = Path.cwd()
    git = open_git_client(project_root)

    if not git.has_commits():
        print_warning(translate("no_commit_found", language))
        raise click.exceptions.Exit(EXIT_SUCCESS)

    try:
        current = get_current_version(project_root)
        # Validate the version before doing any analysis.
        bump_version(current, BumpLevel.PATCH)
    except ReleaseError as exc:
        print_error(f"{translate('version_read_failed', language)} {exc}")
        raise click.exceptions.Exit(EXIT_FAILURE)

    click.echo(f"{click.style(translate('current_version', language), bold=True)} {click.style(current, fg='cyan')}")
    click.echo("")

    click.echo(click.style(translate("analyzing_commit", language), bold=True))
    analysis = analyze_last_commit(git)
    click.echo("")
    show_analysis(analysis, language)

    level = analysis.bump_level
    suggested = bump_version(current, level)
    click.echo(
        f"{click.style(translate('suggested_type', language), bold=True)} "
        f"{BUMP_EMOJIS[level]} {click.style(level.value.upper(), fg=LEVEL_COLORS[level])}"
    )
    click.echo(
        f"{click.style(translate('new_version', language), bold=True)} "
        f"{click.style(current, fg='cyan')} → {click.style(suggested, fg='green', bold=True)}"
    )
    click.echo("")

    if not ask_yes_no(translate("update_version", language), language):
        click.echo("")
        print_warning(translate("version_not_changed", language))
        raise click.exceptions.Exit(EXIT_SUCCESS)

    click.echo("")
    final_level = choose_bump_level(current, level, language)
    final_version = bump_version(current, final_level)

    click.echo("")
    click.echo(click.style(translate("updating_files", language), bold=True))
    click.echo("")
    update_release_files(final_version, git, project_root, language)

    click.echo("")
    click.echo(click.style(f"✓ {translate('version_updated_to', language, version=final_version)}", fg="green", bold=True))
    click.echo("")

    publish(git, final_version, language)


@click.group(invoke_without_command=True)
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="version-control")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """🚀 Suggest a semantic version bump for the last commit and publish it.

    Without a subcommand the last commit is analyzed, the version files
    and changelog are updated, and the release is committed, tagged and
    pushed.
    """
    configure_logging(verbose)
    if ctx.invoked_subcommand is not None:
        return

    try:
        run_release_flow(current_language())
        raise click.exceptions.Exit(EXIT_SUCCESS)
    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except click.exceptions.Abort:
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_FAILURE)


@main.command("config")
@click.option("--lang", "lang", type=click.Choice(SUPPORTED_LANGUAGES), help="Set the output language.")
@click.option("--clear", is_flag=True, help="Forget the configured language and use the system one.")
def config_command(lang: Optional[str], clear: bool) -> None:
    """Show or change the output language."""
    try:
        if lang:
            set_language(lang)
            language = Language(lang)
            print_success(f"{translate('language_set', language)} {click.style(lang.upper(), bold=True)}")
            return
        if clear:
            clear_language()
            print_success(translate("language_cleared", current_language()))
            return
    except ConfigError as exc:
        print_error(f"{translate('config_error', current_language())} {exc}")
        raise click.exceptions.Exit(EXIT_FAILURE)

    language = current_language()
    print_info(
        f"{translate('current_language_is', language)} "
        f"{click.style(language.value.upper(), bold=True)} ({language_source(language)})"
    )
    click.echo(f"  {translate('available_languages', language)}")
    click.echo(f"  {translate('to_change_language', language)} version-control config --lang <code>")


# ---------------------------------------------------------------------------
# smart-commit flow
# ---------------------------------------------------------------------------

def show_staged_changes(changes: List[FileChangeRecord], language: Language) -> None:
    click.echo(f"{click.style(translate('staged_files', language), bold=True)} {len(changes)}")
    for change in changes[:MAX_LISTED_STAGED_FILES]:
        icon = STATUS_ICONS.get(change.status, "📝")
        stats = click.style(f"(+{change.additions}/-{change.deletions})", fg="cyan")
        click.echo(f"  {icon} {change.path} {stats}")
    remaining = len(changes) - MAX_LISTED_STAGED_FILES
    if remaining > 0:
        click.echo(f"  {translate('and_more_files', language, count=remaining)}")
    click.echo("")


def run_smart_commit_flow(language: Language) -> None:
    print_banner(translate("smart_commit", language))
    print_info(
        f"{translate('current_language_is', language)} "
        f"{click.style(language.value.upper(), bold=True)} ({language_source(language)})"
    )
    click.echo(f"  {translate('to_change_language', language)} version-control config --lang <code>")
    click.echo("")

    git = open_git_client(Path.cwd())
    if not git.staged_paths():
        print_info(translate("no_staged_files", language))
        click.echo("")
        click.echo(click.style(translate("how_to_use", language), bold=True))
        click.echo(f"  1. {translate('make_changes', language)}")
        click.echo(f"  2. {translate('stage_files', language)} git add <files>")
        click.echo(f"  3. {translate('run_command', language)} smart-commit")
        click.echo("")
        raise click.exceptions.Exit(EXIT_SUCCESS)

    changes = git.staged_changes()
    show_staged_changes(changes, language)

    click.echo(click.style(translate("analyzing_changes", language), bold=True))
    suggestion = generate_commit_message(changes)
    click.echo("")
    click.echo(click.style(translate("generated_message", language), bold=True))
    click.echo(click.style(suggestion.full_message, fg="green"))
    click.echo("")

    click.echo(click.style(translate("details", language), bold=True))
    click.echo(f"  {translate('type', language)} {click.style(suggestion.kind, fg='cyan')}")
    if suggestion.scope:
        click.echo(f"  {translate('scope', language)} {click.style(suggestion.scope, fg='cyan')}")
    click.echo(f"  {translate('description', language)} {click.style(suggestion.description, fg='cyan')}")
    click.echo("")

    question = (
        f"{translate('options', language)} [1] {translate('option_commit', language)} "
        f"[2] {translate('option_edit', language)} [3] {translate('option_cancel', language)} "
        f"({translate('default_label', language)}: 1)\n{translate('choice', language)}"
    )
    choice = ask_choice(question, ["1", "2", "3"], "1", translate("invalid_enter", language))

    message = suggestion.full_message
    if choice == "2":
        click.echo("")
        message = click.prompt(translate("enter_commit_message", language), default="", show_default=False)
        if not message.strip():
            click.echo("")
            print_error(translate("empty_message", language))
            raise click.exceptions.Exit(EXIT_FAILURE)
    elif choice == "3":
        click.echo("")
        print_warning(translate("commit_cancelled", language))
        raise click.exceptions.Exit(EXIT_SUCCESS)

    click.echo("")
    click.echo(click.style(translate("committing", language), bold=True))
    try:
        git.commit(message.strip())
    except GitError as exc:
        click.echo("")
        print_error(f"{translate('commit_failed', language)}: {exc}")
        raise click.exceptions.Exit(EXIT_FAILURE)

    click.echo("")
    click.echo(click.style(f"✓ {translate('commit_success', language)}", fg="green", bold=True))
    click.echo("")


@click.command()
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="smart-commit")
@click.pass_context
def smart_commit(ctx: click.Context, verbose: bool) -> None:
    """✨ Generate a Conventional Commit message for the staged changes."""
    configure_logging(verbose)
    try:
        run_smart_commit_flow(current_language())
        raise click.exceptions.Exit(EXIT_SUCCESS)
    except click.exceptions.Exit:
        raise
    except click.exceptions.Abort:
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_FAILURE)
