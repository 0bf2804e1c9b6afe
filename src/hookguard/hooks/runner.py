"""Hook runner: load hooks, bracket them with environment setup/cleanup, run them."""

from __future__ import annotations

import logging
import traceback
from typing import TYPE_CHECKING

from ..core.interrupts import HookInterrupted, InterruptIsolation, default_isolation
from ..core.process import reap_detached
from .loader import HookLoader
from .models import HookStatus, HookUnit, ResultSink

if TYPE_CHECKING:
    from ..core.config import Config
    from .context import HookContext

logger = logging.getLogger(__name__)

INTERRUPTED_MESSAGE = "Hook was interrupted by Ctrl-C; restoring repo state..."


class HookRunner:
    """Loads the hooks configured for a context and runs them in order.

    Loading, environment setup and cleanup run with Ctrl-C fully suppressed.
    Only an individual hook's execution can be interrupted; doing so stops
    the run after that hook and still restores the environment.
    """

    def __init__(
        self,
        config: Config,
        context: HookContext,
        printer: ResultSink,
        isolation: InterruptIsolation | None = None,
        loader: HookLoader | None = None,
    ) -> None:
        self.config = config
        self.context = context
        self.printer = printer
        self.isolation = isolation or default_isolation
        self.loader = loader or HookLoader(config, context)
        self.hooks: list[HookUnit] = []

    def run(self) -> bool:
        """Returns True when no hook failed and the run was not interrupted."""
        # Setup and cleanup are assumed to finish quickly, so they are never
        # interruptible.
        with self.isolation.isolate():
            # Load before touching the repository so a load error leaves it as is
            self.hooks = self.loader.load_hooks()

            # No cleanup if setup raises: it may not have got far enough for
            # cleanup to mean anything.
            self.context.setup_environment()
            try:
                return self._run_hooks()
            finally:
                self.context.cleanup_environment()
                reap_detached()

    def _run_hooks(self) -> bool:
        if not any(hook.enabled() for hook in self.hooks):
            self.printer.nothing_to_run()
            return True

        self.printer.start_run()

        failed = warned = interrupted = False
        for hook in self.hooks:
            status = self._run_hook(hook)
            if status is HookStatus.FAIL:
                failed = True
            elif status is HookStatus.WARN:
                warned = True
            elif status is HookStatus.INTERRUPT:
                interrupted = True
                break

        self._report(failed, warned, interrupted)
        return not (failed or interrupted)

    def _report(self, failed: bool, warned: bool, interrupted: bool) -> None:
        if interrupted:
            self.printer.run_interrupted()
        elif failed:
            self.printer.run_failed()
        elif warned:
            self.printer.run_warned()
        else:
            self.printer.run_succeeded()

    def _run_hook(self, hook: HookUnit) -> HookStatus | None:
        if self._should_skip(hook):
            return None

        self.printer.start_hook(hook)
        try:
            # Ctrl-C stops this hook only; protection is back on by the time
            # HookInterrupted reaches the handler below.
            with self.isolation.deferred():
                status, output = hook.run_and_transform()
            status = HookStatus(status)
            output = output or ""
        except HookInterrupted:
            status, output = HookStatus.INTERRUPT, INTERRUPTED_MESSAGE
        except Exception as e:
            logger.debug("hook %s raised", hook.name, exc_info=True)
            status = HookStatus.FAIL
            output = f"Hook raised unexpected error\n{e}\n{traceback.format_exc().rstrip()}"

        self.printer.end_hook(hook, status, output)
        return status

    def _should_skip(self, hook: HookUnit) -> bool:
        if not hook.enabled():
            return True

        if hook.skip_requested():
            if hook.required():
                self.printer.required_hook_not_skipped(hook)
            else:
                # Only mention the skip if the hook would actually have run
                if hook.would_run():
                    self.printer.hook_skipped(hook)
                return True

        return not hook.would_run()
