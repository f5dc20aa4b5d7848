"""
Path templating for remote resources.

A template is a path whose segments may contain ``:name`` placeholders,
e.g. ``/organizations/:organization_id/users/:id``.  Expanding it never
touches the network; it either yields a concrete path or raises
:py:class:`PathError`.
"""
import dataclasses
import re
import typing

from .exceptions import PathError

PLACEHOLDER_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def placeholders(template: str) -> typing.Sequence[str]:
    return PLACEHOLDER_RE.findall(template)


def expand_path(template: str, parameters: typing.Mapping[str, typing.Any]) -> str:
    """
    Substitutes every placeholder in ``template`` with the corresponding value
    from ``parameters``.  A value of ``None`` counts as missing.

    :param str template: the path template.
    :param Mapping[str, Any] parameters: values for the placeholders.
    :return: the expanded path.
    :raises PathError: if a placeholder cannot be filled.
    """

    def _replace(m: typing.Match) -> str:
        value = parameters.get(m.group(1))
        if value is None:
            raise PathError(template, m.group(1), parameters)
        return str(value)

    return PLACEHOLDER_RE.sub(_replace, template)


@dataclasses.dataclass(frozen=True)
class ResourcePaths:
    """
    The canonical paths of a model type.
    """

    collection_path: str
    resource_path: str
    primary_key: str = "id"

    def parameters_for(
        self, fields: typing.Mapping[str, typing.Any]
    ) -> typing.Mapping[str, typing.Any]:
        if fields.get("id") is None and self.primary_key != "id":
            return {**fields, "id": fields.get(self.primary_key)}
        return fields

    def build_request_path(
        self,
        fields: typing.Mapping[str, typing.Any],
        template: typing.Optional[str] = None,
    ) -> str:
        """
        Expands ``template`` (the resource path unless given) against ``fields``.
        The ``:id`` placeholder falls back to the primary key field.
        """
        return expand_path(
            self.resource_path if template is None else template,
            self.parameters_for(fields),
        )

    def build_collection_path(self, fields: typing.Mapping[str, typing.Any]) -> str:
        return expand_path(self.collection_path, self.parameters_for(fields))
