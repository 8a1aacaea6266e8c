"""
Generation pipeline for segment dungeons.

Wraps the layout generator with the parts a caller needs around one run:
settings validation, seeded retries until a blueprint passes the quality
gate, cancellation and timeouts, progress reporting, and optional debug
graph dumps.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..generators.layout import (
    Blueprint,
    GenerationCancelledException,
    GenerationTimeoutError,
    LayoutResult,
    SegmentLayoutGenerator,
)
from ..generators.segments import ORIGIN, BlockPos, InvariantViolation
from ..generators.templates import TemplateCatalog
from ..validation import ValidationResult, validate_blueprint, validate_templates
from .debug.graph_export import derive_attempt_seed, export_blueprint_dot, export_blueprint_json
from .settings import GenerationSettings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PipelineStage(Enum):
    INITIALIZE = "initialize"
    GENERATE_LAYOUT = "generate_layout"
    VALIDATE = "validate"
    EXPORT = "export"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class PipelineError(Exception):
    pass


# ---------------------------------------------------------------------------
# Progress / result dataclasses
# ---------------------------------------------------------------------------

@dataclass
class PipelineProgress:
    stage: PipelineStage
    attempt: int
    max_attempts: int
    message: str
    elapsed_time: float

    @property
    def percentage(self) -> int:
        return int(100 * self.attempt / max(self.max_attempts, 1))


@dataclass
class PipelineResult:
    success: bool
    blueprint: Optional[Blueprint] = None
    validation: Optional[ValidationResult] = None
    output_files: List[str] = field(default_factory=list)
    stages_completed: List[PipelineStage] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_time(self) -> float:
        return self.metrics.get("total_time", 0.0)

    @property
    def seed(self) -> Optional[int]:
        return self.metrics.get("seed")

    def add_error(self, error: str, stage: Optional[PipelineStage] = None):
        if stage:
            error = f"[{stage.value}] {error}"
        self.errors.append(error)

    def add_warning(self, warning: str, stage: Optional[PipelineStage] = None):
        if stage:
            warning = f"[{stage.value}] {warning}"
        self.warnings.append(warning)


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------

class GenerationPipeline:
    """Generates a validated blueprint from a template catalog."""

    def __init__(self, catalog: TemplateCatalog, settings: Optional[GenerationSettings] = None):
        self.catalog = catalog
        self.settings = settings or GenerationSettings()
        self.is_running = False
        self.is_cancelled = False
        self.current_stage = PipelineStage.INITIALIZE
        self.progress_callback: Optional[Callable[[PipelineProgress], None]] = None
        self._start_time = 0.0
        self._validate_settings()

    # -- helpers --

    def set_progress_callback(self, callback: Callable[[PipelineProgress], None]):
        self.progress_callback = callback

    def cancel(self):
        self.is_cancelled = True

    def _check_cancellation(self):
        if self.is_cancelled:
            raise GenerationCancelledException("Pipeline cancelled by user")

    def _update_progress(self, attempt: int, message: str):
        if self.is_cancelled or not self.progress_callback:
            return
        progress = PipelineProgress(
            stage=self.current_stage,
            attempt=attempt,
            max_attempts=self.settings.max_attempts,
            message=message,
            elapsed_time=time.monotonic() - self._start_time,
        )
        try:
            self.progress_callback(progress)
        except Exception:
            logger.exception("Progress callback failed")

    def _validate_settings(self):
        errors = self.settings.validate()
        if errors:
            raise PipelineError(f"Invalid settings: {'; '.join(errors)}")

    # -- stages --

    def _check_templates(self, result: PipelineResult):
        self.current_stage = PipelineStage.INITIALIZE
        template_check = validate_templates(self.catalog.templates())
        for issue in template_check.issues:
            result.add_warning(issue.format(), PipelineStage.INITIALIZE)
        if template_check.failed:
            raise PipelineError(template_check.errors[0].message)
        result.stages_completed.append(PipelineStage.INITIALIZE)

    def _run_attempt(self, seed: int, root_origin: BlockPos, deadline: Optional[float]) -> LayoutResult:
        timeout = None
        if deadline is not None:
            timeout = deadline - time.monotonic()
            if timeout <= 0:
                raise GenerationTimeoutError(
                    f"Generation exceeded {self.settings.timeout_seconds:.2f}s")
        generator = SegmentLayoutGenerator(
            # Each attempt gets a fresh pool; templates are consumed per run
            self.catalog.templates(),
            seed=seed,
            max_distance=self.settings.max_distance,
            max_segments=self.settings.max_segments,
            max_tries_per_entrance=self.settings.max_tries_per_entrance,
            max_depth=self.settings.max_depth,
            prioritize_features=self.settings.prioritize_features,
            root_origin=root_origin,
            timeout_seconds=timeout,
            cancel_check=lambda: self.is_cancelled,
        )
        return generator.generate()

    def _validate(self, blueprint: Blueprint) -> ValidationResult:
        return validate_blueprint(
            blueprint,
            max_distance=self.settings.max_distance,
            required_vaults=self.settings.vault_colors(),
            required_keys=self.settings.key_colors(),
            min_segments=self.settings.min_segments,
        )

    def _is_acceptable(self, blueprint: Blueprint, check: ValidationResult) -> bool:
        return check.passed and blueprint.segment_count - 1 >= self.settings.min_segments

    def _write_graph_dump(self, result: PipelineResult, blueprint: Blueprint, seed: int):
        """Write debug graph dump (DOT or JSON format)."""
        self.current_stage = PipelineStage.EXPORT
        out_dir = Path(self.settings.output_dir) if self.settings.output_dir else Path("output")
        out_dir.mkdir(parents=True, exist_ok=True)

        try:
            if self.settings.graph_dump_format == "json":
                content = export_blueprint_json(blueprint, seed)
                graph_path = str(out_dir / f"{self.settings.name}_debug.json")
            else:
                content = export_blueprint_dot(blueprint)
                graph_path = str(out_dir / f"{self.settings.name}_debug.dot")

            with open(graph_path, 'w', encoding='utf-8') as f:
                f.write(content)

            result.output_files.append(graph_path)
            result.stages_completed.append(PipelineStage.EXPORT)
            logger.info("Debug graph written: %s", graph_path)
        except OSError as e:
            result.add_warning(f"Failed to write debug graph: {e}", PipelineStage.EXPORT)

    # -- main entry --

    def generate(self, root_origin: BlockPos = ORIGIN) -> PipelineResult:
        """
        Generate a blueprint, retrying with derived seeds until one passes.

        Args:
            root_origin: Where the hub is placed

        Returns:
            PipelineResult; on failure `errors` explains why. When no attempt
            passes, the largest blueprint is still returned with success=False.
        """
        if self.is_running:
            raise PipelineError("Pipeline is already running")
        self.is_running = True
        self.is_cancelled = False
        self._start_time = time.monotonic()
        result = PipelineResult(success=False)
        deadline = None
        if self.settings.timeout_seconds is not None:
            deadline = self._start_time + self.settings.timeout_seconds

        try:
            if self.settings.seed is not None:
                base_seed = self.settings.seed
            else:
                base_seed = random.randint(0, 2**31 - 1)
            result.metrics['seed'] = base_seed
            logger.info("Generation seed: %d", base_seed)

            self._check_templates(result)

            best: Optional[LayoutResult] = None
            best_check: Optional[ValidationResult] = None
            for attempt in range(self.settings.max_attempts):
                self._check_cancellation()
                self.current_stage = PipelineStage.GENERATE_LAYOUT
                seed = derive_attempt_seed(base_seed, attempt)
                logger.info("Layout attempt %d/%d (seed %d)", attempt + 1, self.settings.max_attempts, seed)
                self._update_progress(attempt, f"Attempt {attempt + 1} with seed {seed}")

                layout = self._run_attempt(seed, root_origin, deadline)
                if not layout.success:
                    for error in layout.errors:
                        result.add_error(error, PipelineStage.GENERATE_LAYOUT)
                    return result

                self.current_stage = PipelineStage.VALIDATE
                check = self._validate(layout.blueprint)
                result.metrics['attempts'] = attempt + 1
                if best is None or layout.segment_count > best.segment_count:
                    best, best_check = layout, check
                if self._is_acceptable(layout.blueprint, check):
                    best, best_check = layout, check
                    result.success = True
                    break
                logger.info("Attempt %d rejected: %s", attempt + 1,
                            ", ".join(check.codes()) or "too few segments")

            result.stages_completed.append(PipelineStage.GENERATE_LAYOUT)
            result.stages_completed.append(PipelineStage.VALIDATE)
            result.blueprint = best.blueprint
            result.validation = best_check
            result.metrics['seed_used'] = best.seed
            result.metrics['segment_count'] = best.segment_count
            result.metrics['layout'] = best.stats.to_dict()
            for issue in best_check.warnings:
                result.add_warning(issue.format(), PipelineStage.VALIDATE)
            if not result.success:
                result.add_error(
                    f"No acceptable layout after {self.settings.max_attempts} attempts",
                    PipelineStage.VALIDATE)
                for issue in best_check.errors:
                    result.add_error(issue.format(), PipelineStage.VALIDATE)

            if self.settings.enable_graph_dump:
                self._write_graph_dump(result, best.blueprint, best.seed)

            result.stages_completed.append(PipelineStage.COMPLETE)
            result.metrics["total_time"] = time.monotonic() - self._start_time
            logger.info("Pipeline complete in %.2fs (%d segments)",
                        result.metrics["total_time"], best.segment_count)
        except GenerationTimeoutError as e:
            result.add_error(str(e), self.current_stage)
        except GenerationCancelledException:
            result.add_error("Pipeline cancelled by user")
        except PipelineError as e:
            result.add_error(str(e), self.current_stage)
        except InvariantViolation:
            raise
        except Exception as e:
            logger.exception("Unexpected pipeline error")
            result.add_error(f"Unexpected error: {e}")
        finally:
            self.is_running = False
        return result
