"""Models for the device group hierarchy."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from panorama_cli.protocol.response import XmlText, ensure_list


def _group_entries(value: object) -> list[object]:
    # A bare <dg/> decodes to None and stands for a group without a name.
    if value is None:
        return [{}]
    return [{} if item is None else item for item in ensure_list(value)]


class HierarchyNode(BaseModel):
    """A device group and the groups nested below it."""

    model_config = ConfigDict(populate_by_name=True)

    name: XmlText = Field(default="", alias="@name")
    children: Annotated[list[HierarchyNode], BeforeValidator(_group_entries)] = Field(
        default_factory=list, alias="dg"
    )


class DeviceGroupHierarchy(BaseModel):
    groups: Annotated[list[HierarchyNode], BeforeValidator(_group_entries)] = Field(
        default_factory=list
    )


HierarchyNode.model_rebuild()
