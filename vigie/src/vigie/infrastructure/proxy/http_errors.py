"""
Helpers shared by the sidecar HTTP calls.
"""


def describe_error(error: BaseException) -> str:
    """Error text for logs; some httpx errors have an empty message."""
    return str(error) or type(error).__name__
