"""Command runner for coordinating CLI execution.

Manages component lifecycle, resource cleanup, logging configuration,
and error handling for command execution.
"""

from __future__ import annotations

from typing import Callable, TextIO

import click

from SampaSearch.cli.commands import InteractiveCommand, SearchCommand
from SampaSearch.config import AppConfig
from SampaSearch.renderers import ConsolePresenter, Presenter
from SampaSearch.services import EventLoop, SearchSessionController, create_controller
from SampaSearch.sources.backend import create_backend_client, load_remote_config
from SampaSearch.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig, presenter_factory: Callable[[], Presenter] = ConsolePresenter) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
            presenter_factory: Builds the presenter for each run.
        """
        self.config = config
        self.presenter_factory = presenter_factory

    def run_search(self, action: str, query: str, max_pages: int | None = None) -> None:
        """Run a one-shot search.

        Raises:
            click.Abort: When the search fails unexpectedly.
        """
        self._configure_logging(action)
        pages = max_pages or self.config.display.max_pages
        self._run(lambda controller, loop: SearchCommand(controller, loop, max_pages=pages).execute(query))

    def run_interactive(self, action: str, stream: TextIO) -> None:
        """Run the interactive session reading commands from ``stream``.

        Raises:
            click.Abort: When the session fails unexpectedly.
        """
        self._configure_logging(action, console_level="INFO")
        log.info("Digite uma busca, :more, :rm CATEGORIA=VALOR, :cancel ou :quit")
        self._run(lambda controller, loop: InteractiveCommand(controller, loop).execute(stream))

    def _configure_logging(self, action: str, console_level: str = "DEBUG") -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
            console_level=self.config.runtime.console_level or console_level,
        )

    def _run(self, body: Callable[[SearchSessionController, EventLoop], object]) -> None:
        client = create_backend_client(self.config)
        try:
            loop = EventLoop()
            controller = create_controller(self.config, self.presenter_factory(), loop, client)
            load_remote_config(client, loop, controller.on_config_loaded)
            try:
                body(controller, loop)
            finally:
                controller.cancel_active_search()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e
        finally:
            client.close()
