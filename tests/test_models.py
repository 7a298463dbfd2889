from __future__ import annotations

import pytest

from ncx_nav.models.navigation import (
    NavigationContent,
    NavigationLabel,
    NavigationPoint,
    PageTargetType,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("front", PageTargetType.FRONT),
        ("Normal", PageTargetType.NORMAL),
        (" SPECIAL ", PageTargetType.SPECIAL),
        ("undefined", PageTargetType.UNDEFINED),
        ("chapter", PageTargetType.UNDEFINED),
        ("", PageTargetType.UNDEFINED),
        (None, PageTargetType.UNDEFINED),
    ],
)
def test_page_target_type_from_string(
    value: str | None, expected: PageTargetType
) -> None:
    assert PageTargetType.from_string(value) == expected


def point(point_id: str, *children: NavigationPoint) -> NavigationPoint:
    return NavigationPoint(
        id=point_id,
        labels=(NavigationLabel(text=point_id.upper()),),
        content=NavigationContent(source=f"{point_id}.xhtml"),
        children=children,
    )


def test_iter_points_depth_first_with_depth() -> None:
    root = point("a", point("b", point("c")), point("d"))

    assert [(depth, p.id) for depth, p in root.iter_points()] == [
        (1, "a"),
        (2, "b"),
        (3, "c"),
        (2, "d"),
    ]
    assert root.label == "A"


def test_point_to_dict_matches_model_dump() -> None:
    root = point("a", point("b", point("c")), point("d"))

    assert root.to_dict() == root.model_dump(mode="json")


def test_point_to_dict_deep_chain() -> None:
    root = point("p1000")
    for level in range(999, 0, -1):
        root = point(f"p{level}", root)

    data = root.to_dict()
    ids = []
    while data["children"]:
        ids.append(data["id"])
        data = data["children"][0]
    ids.append(data["id"])

    assert ids == [f"p{level}" for level in range(1, 1001)]
