"""Smoke tests: the public API imports and renders."""

import object_printing


def test_import():
    assert object_printing.print_to_string is not None
    assert object_printing.PrintingConfig is not None


def test_public_names_exist():
    for name in object_printing.__all__:
        assert hasattr(object_printing, name), name


def test_print_to_string_with_config():
    config = object_printing.PrintingConfig().with_max_elements(1)
    assert object_printing.print_to_string([1, 2], config) == "list\n\t[\n1\n\t...\n\t]\n"
