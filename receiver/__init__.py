from receiver.handler import Handler, lambda_handler

__all__ = ["Handler", "lambda_handler"]
