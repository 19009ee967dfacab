"""Base class for all sub-clients.

This is an internal module and should not be imported directly by users.
"""

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from client._http import HTTPClient

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseClient:
    """Base class for sub-clients.

    Every namespaced client (SimulationClient, ControlsClient, ...) shares
    one HTTPClient through this class.

    Attributes:
        _http: The shared HTTP client for making requests.
    """

    def __init__(self, http_client: "HTTPClient") -> None:
        self._http = http_client

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._http.get(path, params=params)

    def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self._http.post(path, json=json, params=params)

    def _get_model(
        self, model: type[ModelT], path: str, params: dict[str, Any] | None = None
    ) -> ModelT:
        """GET a path and validate the body into a response model."""
        return model.model_validate(self._get(path, params=params))

    def _post_model(
        self, model: type[ModelT], path: str, json: dict[str, Any] | None = None
    ) -> ModelT:
        """POST to a path and validate the body into a response model."""
        return model.model_validate(self._post(path, json=json))
