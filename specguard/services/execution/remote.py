"""
Client for a long-lived remote test service.

The service is an XML-RPC server on the local host exposing
``run(paths, args) -> int``. No timeout is set: a service that accepts the
connection but never answers blocks the caller.
"""

import http.client
import xmlrpc.client
from xml.parsers.expat import ExpatError

from ...core.exceptions import RemoteServiceConnectionError, RemoteServiceError

DEFAULT_HOST = "127.0.0.1"
DEFAULT_DRB_PORT = 8989


class XmlRpcRunService:
    """Runs specs through an XML-RPC test server."""

    def __init__(self, port: int = DEFAULT_DRB_PORT, host: str = DEFAULT_HOST) -> None:
        self.port = port
        self.host = host

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}/"

    def run(self, paths: list[str], args: list[str]) -> int:
        """
        Ask the server to run the paths.

        Args:
            paths: Spec files or directories
            args: Extra RSpec arguments

        Returns:
            The exit code reported by the server

        Raises:
            RemoteServiceConnectionError: If the connection fails (refused, reset,
                closed without an answer)
            RemoteServiceError: If the server answered with a fault, an HTTP
                error or something that is not XML-RPC
        """
        with xmlrpc.client.ServerProxy(self.url, allow_none=True) as proxy:
            try:
                result = proxy.run(list(paths), list(args))
            except OSError as e:
                # Refused, reset or closed before answering: nothing usable is listening
                raise RemoteServiceConnectionError(
                    "No test service is listening", port=self.port, cause=e
                ) from e
            except (
                xmlrpc.client.Error,
                http.client.HTTPException,
                ExpatError,
            ) as e:
                raise RemoteServiceError(
                    "Test service failed to run the specs", port=self.port, cause=e
                ) from e

        if isinstance(result, bool) or not isinstance(result, int):
            raise RemoteServiceError(
                "Test service returned a non-integer result",
                port=self.port,
                context={"result": result},
            )
        return result
