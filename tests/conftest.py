from typing import Any

import pytest

from assay import array_of, has, optional, recursive, required, string, number


def _rose_tree():
    tree = recursive(
        lambda: has(
            {
                "value": required(string),
                "children": required(array_of(tree)),
            }
        ),
        name="rose_tree",
    )
    return tree


def _person():
    person = recursive(
        lambda: has(
            {
                "name": required(
                    has(
                        {
                            "first": required(string),
                            "last": required(string),
                        }
                    )
                ),
                "age": optional(number),
                "children": required(array_of(person)),
            }
        ),
        name="person",
    )
    return person


@pytest.fixture(scope="session")
def rose_tree():
    return _rose_tree()


@pytest.fixture(scope="session")
def person_validator():
    return _person()


@pytest.fixture(scope="function")
def person_data() -> dict[str, Any]:
    return {
        "name": {"first": "Kaden", "last": "Thomas"},
        "age": 20,
        "children": [
            {"name": {"first": "Ada", "last": "Thomas"}, "children": []},
        ],
    }
