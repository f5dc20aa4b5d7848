"""
resource_relationships.implementations.requests contains a
:py:class:`ResourceLoader` that talks to a JSON API over HTTP through
`requests <https://requests.readthedocs.io/>`_.

Synopsis
--------

.. code-block:: python

   from resource_relationships import ModelRegistry
   from resource_relationships.implementations.requests import RequestsResourceLoader

   registry = ModelRegistry(
       loader=RequestsResourceLoader("https://api.example.com", timeout=10),
   )

"""
import collections.abc
import logging
import typing

import requests

from ...interfaces import ResourceLoader
from ...models import Collection

if typing.TYPE_CHECKING:
    from ...model import Model  # noqa: F401

logger = logging.getLogger(__name__)


class RequestsResourceLoader(ResourceLoader):
    base_url: str
    session: requests.Session
    timeout: typing.Optional[float]
    collection_key: typing.Optional[str]

    def _get(self, path: str, params: typing.Mapping[str, typing.Any]) -> typing.Any:
        url = self.base_url + path
        logger.debug("GET %s %r", url, dict(params))
        resp = self.session.get(url, params=dict(params), timeout=self.timeout)
        resp.raise_for_status()
        if not resp.content:
            return None
        return resp.json()

    def fetch_collection(
        self,
        model_type: typing.Type["Model"],
        path: str,
        params: typing.Mapping[str, typing.Any],
    ) -> Collection:
        body = self._get(path, params)
        metadata: typing.Dict[str, typing.Any] = {}
        errors: typing.Dict[str, typing.Any] = {}
        if body is None:
            items: typing.Sequence[typing.Any] = []
        elif isinstance(body, collections.abc.Mapping) and self.collection_key is not None:
            items = body.get(self.collection_key) or []
            errors = dict(body.get("errors") or {})
            metadata = {
                k: v for k, v in body.items() if k not in (self.collection_key, "errors")
            }
        elif isinstance(body, list):
            items = body
        else:
            raise ValueError(f"expected a JSON array from {path}, got {type(body).__name__}")
        return model_type.build_collection(items, metadata=metadata, errors=errors)

    def fetch_resource(
        self,
        model_type: typing.Type["Model"],
        path: str,
        params: typing.Mapping[str, typing.Any],
    ) -> typing.Optional["Model"]:
        body = self._get(path, params)
        if body is None:
            return None
        if not isinstance(body, collections.abc.Mapping):
            raise ValueError(f"expected a JSON object from {path}, got {type(body).__name__}")
        return model_type.new(dict(body))

    def __init__(
        self,
        base_url: str,
        session: typing.Optional[requests.Session] = None,
        timeout: typing.Optional[float] = None,
        collection_key: typing.Optional[str] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.collection_key = collection_key
