## monkeyfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

import monkeyfl.api as M
from monkeyfl.types import (Integer, Boolean, Null, ReturnValue, Error, TRUE, FALSE, NULL,
                            native_bool, is_truthy, is_abrupt)


def test_singletons_are_canonical():
    assert Boolean(True) is TRUE
    assert Boolean(False) is FALSE
    assert Null() is NULL
    assert native_bool(1 == 1) is TRUE
    assert native_bool(0 == 1) is FALSE

    # Exposed through the API too.
    assert M.TRUE is TRUE and M.NULL is NULL


def test_booleans_are_immutable():
    with pytest.raises(AttributeError):
        TRUE.value = False


@pytest.mark.parametrize("value, type_name, text", [
    (Integer(-12), 'INTEGER', '-12'),
    (TRUE, 'BOOLEAN', 'true'),
    (FALSE, 'BOOLEAN', 'false'),
    (NULL, 'NULL', 'null'),
    (Error("boom"), 'ERROR', 'Error: boom'),
    (ReturnValue(Integer(3)), 'RETURN_VALUE', '3'),
])
def test_type_names_and_inspection(value, type_name, text):
    assert value.type == type_name
    assert value.inspect() == text


def test_truthiness():
    assert is_truthy(Integer(0))
    assert is_truthy(TRUE)
    assert not is_truthy(FALSE)
    assert not is_truthy(NULL)
    assert not is_truthy(None)


def test_abrupt_detection():
    assert is_abrupt(Error("x"))
    assert is_abrupt(ReturnValue(Integer(1)))
    assert not is_abrupt(Integer(1))
    assert not is_abrupt(None)
