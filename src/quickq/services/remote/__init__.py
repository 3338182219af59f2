from .api_client import QuickQApiClient, RemoteFailure

__all__ = ["QuickQApiClient", "RemoteFailure"]
