"""
Generation pipeline: settings, seeded retries, cancellation and debug output.
"""

from .settings import (
    GenerationSettings,
    get_settings_dir,
    list_saved_settings,
    load_settings,
    load_settings_from_path,
    save_settings,
)
from .generation_pipeline import (
    GenerationPipeline,
    PipelineError,
    PipelineProgress,
    PipelineResult,
    PipelineStage,
)

__all__ = [
    'GenerationSettings',
    'get_settings_dir',
    'list_saved_settings',
    'load_settings',
    'load_settings_from_path',
    'save_settings',
    'GenerationPipeline',
    'PipelineError',
    'PipelineProgress',
    'PipelineResult',
    'PipelineStage',
]
