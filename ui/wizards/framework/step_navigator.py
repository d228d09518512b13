# -*- coding: utf-8 -*-
"""
Step Navigator - Manages navigation between wizard steps.

Handles:
- Step progression (next/previous)
- Entry guards before moving forward
- Blocking on validation errors
- Progress tracking
"""

from typing import Callable, Dict, Optional, Sequence

from PyQt5.QtCore import QObject, pyqtSignal

from services.wizard.steps import WizardStep
from .wizard_context import WizardContext
from utils.logger import get_logger

logger = get_logger(__name__)

# Maps a requested step to the step that may actually be shown
EntryGuard = Callable[[WizardStep], WizardStep]


class StepNavigator(QObject):
    """
    Manages navigation between wizard steps.

    Responsibilities:
    - Track current step
    - Run the entry guard on every forward move
    - Refuse to advance while the current step has errors
    - Emit signals for UI updates

    Moving backward is always allowed. The terminal step (if any) is only
    reached through complete().
    """

    # Signals
    step_changed = pyqtSignal(str, str)  # old step, new step
    redirected = pyqtSignal(str, str)  # requested step, shown step
    validation_failed = pyqtSignal(dict)  # field -> message

    def __init__(self, context: WizardContext, steps: Sequence[WizardStep],
                 guard: EntryGuard, terminal_step: Optional[WizardStep] = None):
        """
        Initialize the navigator.

        Args:
            context: Wizard context
            steps: Ordered navigable steps
            guard: Resolves a requested step to the step that may be shown
            terminal_step: State reached by complete(), not navigable
        """
        super().__init__()
        self.context = context
        self.steps = list(steps)
        self.guard = guard
        self.terminal_step = terminal_step
        self.current_step: WizardStep = self.steps[0]
        self.context.set_current_step(self.current_step.value)

    @property
    def current_index(self) -> int:
        if self.is_terminal():
            return len(self.steps) - 1
        return self.steps.index(self.current_step)

    def get_step_count(self) -> int:
        """Get total number of steps."""
        return len(self.steps)

    def is_terminal(self) -> bool:
        return self.terminal_step is not None and self.current_step is self.terminal_step

    def is_last_step(self) -> bool:
        return not self.is_terminal() and self.current_index == len(self.steps) - 1

    def can_go_next(self) -> bool:
        """Check if there is a navigable step after the current one."""
        return not self.is_terminal() and self.current_index < len(self.steps) - 1

    def can_go_previous(self) -> bool:
        """Check if we can navigate to the previous step."""
        return not self.is_terminal() and self.current_index > 0

    def next_step(self, errors: Optional[Dict[str, str]] = None) -> bool:
        """
        Navigate to the next step.

        Args:
            errors: Validation errors for the current step's values

        Returns:
            True if the navigator moved to the next step
        """
        if not self.can_go_next():
            logger.debug(f"Cannot go next from {self.current_step.value}")
            return False

        if errors:
            logger.warning(f"Step {self.current_step.value} validation failed: {errors}")
            self.validation_failed.emit(dict(errors))
            return False

        self.context.mark_step_completed(self.current_step.value)
        target = self.steps[self.current_index + 1]
        return self.goto_step(target) is target

    def previous_step(self) -> bool:
        """Navigate to the previous step."""
        if not self.can_go_previous():
            logger.debug(f"Cannot go previous from {self.current_step.value}")
            return False

        self._navigate_to(self.steps[self.current_index - 1])
        return True

    def goto_step(self, step: WizardStep) -> WizardStep:
        """
        Navigate to a specific step.

        Backward moves are taken as-is; forward moves go through the guard,
        which may send the user to an earlier step instead.

        Returns:
            The step now shown
        """
        if step not in self.steps:
            logger.error(f"Not a navigable step: {step}")
            return self.current_step

        if self.is_terminal():
            logger.debug("Wizard already completed; navigation ignored")
            return self.current_step

        resolved = step
        if self.steps.index(step) > self.current_index:
            resolved = self.guard(step)
            if resolved is not step:
                logger.info(f"Entry to {step.value} blocked, redirecting to {resolved.value}")
                self.redirected.emit(step.value, resolved.value)

        self._navigate_to(resolved)
        return resolved

    def enter(self, step: WizardStep) -> WizardStep:
        """
        Show a step by direct request (e.g. on session resume).

        Unlike goto_step the guard is applied even for earlier steps, since
        the request does not come from the current position.
        """
        if self.is_terminal() or step not in self.steps:
            return self.current_step

        resolved = self.guard(step)
        if resolved is not step:
            logger.info(f"Entry to {step.value} blocked, redirecting to {resolved.value}")
            self.redirected.emit(step.value, resolved.value)
        self._navigate_to(resolved)
        return resolved

    def complete(self, force: bool = False) -> bool:
        """
        Move to the terminal step.

        Only allowed from the last step unless `force` is set, which is used
        when an outcome settled elsewhere must end the wizard.
        """
        if self.terminal_step is None or self.is_terminal():
            return False
        if not force and not self.is_last_step():
            return False
        self.context.mark_step_completed(self.current_step.value)
        self._navigate_to(self.terminal_step)
        return True

    def _navigate_to(self, new_step: WizardStep):
        """Internal method to switch the current step."""
        old_step = self.current_step
        if new_step is old_step:
            return

        self.current_step = new_step
        self.context.set_current_step(new_step.value)

        self.step_changed.emit(old_step.value, new_step.value)

        logger.info(f"Navigation complete: {old_step.value} → {new_step.value}")

    def reset(self):
        """Reset navigator to first step."""
        self._navigate_to(self.steps[0])

    def get_progress_percentage(self) -> float:
        """
        Get current progress as percentage, counting the current step.

        Returns:
            Progress percentage (0.0 to 100.0)
        """
        if self.is_terminal():
            return 100.0
        return (self.current_index + 1) / len(self.steps) * 100.0

    def get_completed_steps_count(self) -> int:
        """Get number of completed steps."""
        return len(self.context.completed_steps)
