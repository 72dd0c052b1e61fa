# src/mackerel_api/utils/api/response_handler.py

from typing import Dict, Any, Optional, List, TypeVar, Callable
import logging
from .api_client import APIResponse
from ...core.exceptions import ResponseError

T = TypeVar('T')
logger = logging.getLogger(__name__)

class ResponseHandler:
    """
    Extracts and converts data from Mackerel API responses.

    Mackerel wraps results in a single-key envelope, e.g. {"host": {...}},
    {"hosts": [...]} or {"id": "..."}. This class provides:
    - Envelope key extraction with type checks
    - Conversion into model instances via their from_dict
    """

    def _envelope(self, response: APIResponse) -> Dict[str, Any]:
        if not isinstance(response.data, dict):
            raise ResponseError(
                f"Expected a JSON object but got {type(response.data).__name__}",
                status_code=response.status
            )
        return response.data

    def extract(
        self,
        response: APIResponse,
        key: str,
        expected_type: Optional[type] = None
    ) -> Any:
        """
        Extract a value from the response envelope

        Args:
            response: APIResponse to read
            key: Envelope key, e.g. "host"
            expected_type: Type the value must have

        Returns:
            The value stored under key
        """
        envelope = self._envelope(response)
        if key not in envelope:
            raise ResponseError(f"Response is missing '{key}'", status_code=response.status)
        value = envelope[key]
        if expected_type is not None and not isinstance(value, expected_type):
            raise ResponseError(
                f"Response field '{key}' should be {expected_type.__name__} "
                f"but got {type(value).__name__}",
                status_code=response.status
            )
        return value

    def to_model(
        self,
        response: APIResponse,
        key: str,
        factory: Callable[[Dict[str, Any]], T]
    ) -> T:
        """Convert the object under key into a model"""
        value = self.extract(response, key, dict)
        return self._convert(response, key, factory, value)

    def to_models(
        self,
        response: APIResponse,
        key: str,
        factory: Callable[[Dict[str, Any]], T]
    ) -> List[T]:
        """Convert the list of objects under key into models"""
        # A null list decodes to no items
        if isinstance(response.data, dict) and response.data.get(key) is None and key in response.data:
            return []
        values = self.extract(response, key, list)
        return [self._convert(response, key, factory, value) for value in values]

    @staticmethod
    def _convert(
        response: APIResponse,
        key: str,
        factory: Callable[[Dict[str, Any]], T],
        value: Any
    ) -> T:
        if not isinstance(value, dict):
            raise ResponseError(f"Invalid '{key}' entry: {value!r}", status_code=response.status)
        try:
            return factory(value)
        except (TypeError, ValueError, AttributeError) as e:
            logger.error(f"Failed to process response: {str(e)}")
            raise ResponseError(f"Failed to decode '{key}': {str(e)}", status_code=response.status)
