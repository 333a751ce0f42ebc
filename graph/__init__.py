"""Graph workflow orchestration for the augmentation flow."""

from .workflow import AugmentationWorkflow, AugmentationState

__all__ = ["AugmentationWorkflow", "AugmentationState"]
