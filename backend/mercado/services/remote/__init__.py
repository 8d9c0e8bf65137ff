"""Remote document store and account service bindings."""

from mercado.services.remote.auth_client import Authenticator, HttpAuthenticator
from mercado.services.remote.document_client import HttpRemoteStore, RemoteStore

__all__ = ["Authenticator", "HttpAuthenticator", "HttpRemoteStore", "RemoteStore"]
