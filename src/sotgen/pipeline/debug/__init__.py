"""Debug exports for generated blueprints."""

from .graph_export import derive_attempt_seed, export_blueprint_dot, export_blueprint_json

__all__ = [
    'derive_attempt_seed',
    'export_blueprint_dot',
    'export_blueprint_json',
]
