"""Main CLI entry point for the mintydocs command.

This module provides the Typer application that serves as the entry point
for the mintydocs command-line tool. Read-only commands (toc, nav, inherit,
permissions) inspect the documentation hierarchy; define writes page
definitions; publish, create-draft, copy and delete plan a bulk workflow,
show the plan and run its tasks unless --dry-run is given.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from ..hierarchy.definition import PageDefiner
from ..hierarchy.errors import AuthoringError
from ..hierarchy.models import ManualPage, Page, PageType, RenderContext, TopicPage
from ..page_store.errors import (
    InvalidCredentialsError,
    MintyDocsError,
    StoreAccessError,
    StoreUnreachableError,
)
from ..permissions.identity import Actor
from ..toc.renderer import HtmlRenderer
from ..workflows.errors import WorkflowPermissionError, WorkflowValidationError
from ..workflows.planner import (
    BulkWorkflow,
    CopyWorkflow,
    CreateDraftWorkflow,
    DeleteWorkflow,
    PublishWorkflow,
)
from ..workflows.task_queue import InMemoryTaskQueue
from .config import DEFAULT_CONFIG_PATH, ConfigLoader
from .context import DocsContext
from .models import ExitCode
from .output import OutputHandler

app = typer.Typer(
    name="mintydocs",
    help="""Product / Version / Manual / Topic documentation on a wiki page store.

QUICK START:
  mintydocs toc "Widget/2.0/Guide"                  # Show a manual's TOC
  mintydocs nav "Widget/2.0/Guide/Install"          # Previous / next topics
  mintydocs publish "Draft:Widget/2.0" --dry-run    # Preview a publish
  mintydocs copy "Widget/2.0/Guide" --to-version 3.0""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    """Global options shared by every command.

    Attributes:
        config_path: Path to the configuration file
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        no_color: Whether colored output is disabled
    """
    config_path: str = DEFAULT_CONFIG_PATH
    verbosity: int = 0
    no_color: bool = False


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'mintydocs' namespace logger to avoid affecting
    third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("mintydocs")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"mintydocs_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt=date_format
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _exit_code_for(error: Exception) -> ExitCode:
    """Map an error to the process exit code."""
    if isinstance(error, WorkflowPermissionError):
        return ExitCode.PERMISSION_DENIED
    if isinstance(error, (AuthoringError, WorkflowValidationError)):
        return ExitCode.AUTHORING_ERROR
    if isinstance(error, (StoreUnreachableError, InvalidCredentialsError, StoreAccessError)):
        return ExitCode.STORE_UNREACHABLE
    return ExitCode.GENERAL_ERROR


def _fail(output: OutputHandler, error: Exception) -> typer.Exit:
    if isinstance(error, MintyDocsError):
        logger.error(str(error))
        output.error(str(error))
    else:
        logger.exception("Unexpected error")
        output.error(f"Unexpected error: {error}")
    return typer.Exit(_exit_code_for(error))


def _output(ctx: typer.Context) -> OutputHandler:
    state: CLIState = ctx.obj
    return OutputHandler(verbosity=state.verbosity, no_color=state.no_color)


def _load_context(ctx: typer.Context) -> DocsContext:
    state: CLIState = ctx.obj
    config = ConfigLoader.load(state.config_path)
    return DocsContext.from_config(config)


def _require(docs: DocsContext, identity: str, page_class=None, expected: str = "hierarchy"):
    if page_class is None:
        page = docs.model.load(identity)
    else:
        page = docs.model.load_as(identity, page_class)
    if page is None:
        raise AuthoringError(f"'{identity}' is not a {expected} page", identity)
    return page


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: str = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Path to the configuration file",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
        min=0,
        max=2,
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Documentation hierarchy tools."""
    _configure_logging(verbosity, logdir)
    ctx.obj = CLIState(config_path=config, verbosity=verbosity, no_color=no_color)


@app.command("toc")
def toc_command(
    ctx: typer.Context,
    manual: str = typer.Argument(..., help="Manual page identity"),
    html: bool = typer.Option(False, "--html", help="Print the rendered HTML"),
) -> None:
    """Show the table of contents of a Manual."""
    output = _output(ctx)
    try:
        docs = _load_context(ctx)
        manual_page = _require(docs, manual, ManualPage, "Manual")
        toc = docs.toc_engine.build(manual_page)
        if toc is None:
            output.warning(f"{manual} has no list of topics")
            raise typer.Exit(ExitCode.SUCCESS)
        for message in toc.warnings:
            output.warning(message)
        if html:
            output.print(toc.rendered)
        else:
            output.print_markdown(HtmlRenderer.to_markdown(toc.rendered))
    except typer.Exit:
        raise
    except Exception as e:
        raise _fail(output, e)


@app.command("nav")
def nav_command(
    ctx: typer.Context,
    topic: str = typer.Argument(..., help="Topic page identity"),
    product: Optional[str] = typer.Option(None, "--product", help="Context Product identity"),
    version: Optional[str] = typer.Option(None, "--version", help="Context Version name"),
    manual: Optional[str] = typer.Option(None, "--manual", help="Context Manual name"),
    ignore_pagination: bool = typer.Option(
        False, "--all", help="Show neighbours even if the Manual has no pagination"
    ),
) -> None:
    """Show the previous and next Topics of a Topic."""
    output = _output(ctx)
    try:
        docs = _load_context(ctx)
        topic_page = _require(docs, topic, TopicPage, "Topic")

        context = None
        if product and version and manual:
            context = RenderContext(product=product, version=version, manual=manual)
        elif product or version or manual:
            output.warning("A context needs --product, --version and --manual; ignoring it")

        previous_topic, next_topic = docs.toc_engine.navigation(
            topic_page, context, require_pagination=not ignore_pagination
        )
        output.print(f"Previous: {previous_topic.identity if previous_topic else '-'}")
        output.print(f"Next: {next_topic.identity if next_topic else '-'}")
    except typer.Exit:
        raise
    except Exception as e:
        raise _fail(output, e)


@app.command("inherit")
def inherit_command(
    ctx: typer.Context,
    page: str = typer.Argument(..., help="Page identity"),
    param: Optional[str] = typer.Option(None, "--param", help="Property to resolve"),
    body: bool = typer.Option(False, "--body", help="Print the resolved page text"),
) -> None:
    """Show where a page's content and parameters are inherited from."""
    output = _output(ctx)
    try:
        docs = _load_context(ctx)
        page_obj: Page = _require(docs, page)

        source = docs.resolver.resolve_inherited_page(page_obj)
        if source is None:
            output.print(f"{page} does not inherit content")
        else:
            output.print(f"Content inherited from: {source.identity}")

        if param:
            value = docs.resolver.resolve_inherited_param(page_obj, param)
            output.print(f"{param}: {value if value is not None else '-'}")
        if body:
            output.print(docs.resolver.resolve_body(page_obj))
    except typer.Exit:
        raise
    except Exception as e:
        raise _fail(output, e)


@app.command("permissions")
def permissions_command(
    ctx: typer.Context,
    page: str = typer.Argument(..., help="Page identity"),
    user: Optional[str] = typer.Option(None, "--user", help="User to check (defaults to current_user)"),
) -> None:
    """Show whether a user may view, edit and administer a page."""
    output = _output(ctx)
    try:
        docs = _load_context(ctx)
        page_obj: Page = _require(docs, page)
        actor = Actor(name=user) if user is not None else None

        name = user if user is not None else docs.permissions.identity_provider.current_actor().name
        output.print(f"User: {name or 'anonymous'}")
        for label, check in (
            ("view", docs.permissions.can_view),
            ("edit", docs.permissions.can_edit),
            ("administer", docs.permissions.can_administer),
        ):
            output.print(f"  {label}: {'yes' if check(page_obj, actor) else 'no'}")
    except typer.Exit:
        raise
    except Exception as e:
        raise _fail(output, e)


@app.command("define")
def define_command(
    ctx: typer.Context,
    page: str = typer.Argument(..., help="Page identity"),
    page_type: str = typer.Option(..., "--type", help="Product, Version, Manual or Topic"),
    display_name: Optional[str] = typer.Option(None, "--display-name"),
    admins: Optional[str] = typer.Option(None, "--admins", help="Product administrators"),
    editors: Optional[str] = typer.Option(None, "--editors", help="Product editors"),
    previewers: Optional[str] = typer.Option(None, "--previewers", help="Product previewers"),
    status: Optional[str] = typer.Option(None, "--status", help="Version status"),
    manuals_list: Optional[str] = typer.Option(None, "--manuals-list", help="Version manuals list"),
    topics_list: Optional[str] = typer.Option(None, "--topics-list", help="Manual TOC markup"),
    topics_list_page: Optional[str] = typer.Option(
        None, "--topics-list-page", help="Page holding the Manual's TOC markup"
    ),
    pagination: bool = typer.Option(False, "--pagination", help="Enable Manual pagination"),
    default_form: Optional[str] = typer.Option(None, "--default-form", help="Topic default form"),
    alternate_forms: Optional[str] = typer.Option(
        None, "--alternate-forms", help="Topic alternate forms"
    ),
    toc_name: Optional[str] = typer.Option(None, "--toc-name", help="Topic label in the TOC"),
    inherit: bool = typer.Option(False, "--inherit", help="Inherit content from earlier versions"),
) -> None:
    """Define a page as a Product, Version, Manual or Topic."""
    output = _output(ctx)
    try:
        kind = PageType.from_value(page_type.strip().capitalize())
        if kind is None:
            raise AuthoringError(f"Unknown page type '{page_type}'", page)

        docs = _load_context(ctx)
        if not docs.store.exists(page):
            docs.store.save_page(page, "", summary="Create page")
        definer = PageDefiner(docs.model, docs.resolver)
        with definer.definition_pass(page):
            if kind == PageType.PRODUCT:
                definer.define_product(page, display_name, admins, editors, previewers)
            elif kind == PageType.VERSION:
                definer.define_version(page, status, manuals_list, inherit)
            elif kind == PageType.MANUAL:
                definer.define_manual(
                    page,
                    display_name,
                    topics_list=topics_list,
                    topics_list_page=topics_list_page,
                    inherit=inherit,
                    pagination=pagination,
                    topic_default_form=default_form,
                    topic_alternate_forms=alternate_forms,
                )
            else:
                definer.define_topic(page, display_name, toc_name, inherit)
        docs.save()
        output.success(f"Defined {page} as a {kind.value}")
    except typer.Exit:
        raise
    except Exception as e:
        raise _fail(output, e)


def _run_workflow(ctx: typer.Context, make_workflow, page: str, dry_run: bool) -> None:
    output = _output(ctx)
    try:
        docs = _load_context(ctx)
        workflow: BulkWorkflow = make_workflow(docs)
        with output.spinner(f"Planning {workflow.action} of {page}..."):
            plan = workflow.plan(page)

        output.print_plan(plan)
        output.print_plan_summary(plan, dry_run=dry_run)
        if dry_run or not plan.tasks:
            raise typer.Exit(ExitCode.SUCCESS)

        queue = InMemoryTaskQueue(docs.store)
        workflow.enqueue(plan, queue)
        results = queue.run_pending()
        docs.save()
        output.print_task_summary(results, workflow.action)
        if any(not result.success for result in results):
            raise typer.Exit(ExitCode.GENERAL_ERROR)
    except typer.Exit:
        raise
    except Exception as e:
        raise _fail(output, e)


def _workflow_args(docs: DocsContext):
    return docs.model, docs.resolver, docs.toc_engine, docs.permissions


DRY_RUN_OPTION = typer.Option(False, "--dry-run", help="Show the plan without running it")


@app.command("publish")
def publish_command(
    ctx: typer.Context,
    page: str = typer.Argument(..., help="Draft page to publish"),
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Publish a draft page and everything under it."""
    _run_workflow(ctx, lambda docs: PublishWorkflow(*_workflow_args(docs)), page, dry_run)


@app.command("create-draft")
def create_draft_command(
    ctx: typer.Context,
    page: str = typer.Argument(..., help="Live page to create a draft of"),
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Create draft copies of a page and everything under it."""
    _run_workflow(ctx, lambda docs: CreateDraftWorkflow(*_workflow_args(docs)), page, dry_run)


@app.command("copy")
def copy_command(
    ctx: typer.Context,
    manual: str = typer.Argument(..., help="Manual to copy"),
    to_version: str = typer.Option(..., "--to-version", help="Version to copy to"),
    to_product: Optional[str] = typer.Option(None, "--to-product", help="Product to copy to"),
    to_manual: Optional[str] = typer.Option(None, "--to-manual", help="New Manual name"),
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Copy a Manual to another Version."""
    _run_workflow(
        ctx,
        lambda docs: CopyWorkflow(
            *_workflow_args(docs),
            to_version=to_version,
            to_product=to_product,
            to_manual=to_manual,
        ),
        manual,
        dry_run,
    )


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    manual: str = typer.Argument(..., help="Manual to delete"),
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Delete a Manual and its Topics."""
    _run_workflow(ctx, lambda docs: DeleteWorkflow(*_workflow_args(docs)), manual, dry_run)


def main() -> None:
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    main()
