from .result import ActionFailure, ActionResult, ActionSuccess, FailureReason

__all__ = ["ActionFailure", "ActionResult", "ActionSuccess", "FailureReason"]
