"""Generate 3D-city UML snapshots from JavaScript/TypeScript source trees."""

from .orchestrator import GenerationOutcome, RunOutcome, UmlGenerator

__version__ = "0.1.0"

__all__ = ["GenerationOutcome", "RunOutcome", "UmlGenerator", "__version__"]
