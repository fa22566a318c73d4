from slaangle.config import CalculatorSettings, InputState, Printer
from slaangle.validation import INVALID_NUMBER, is_valid, parse_number, validate, validation_errors


def test_empty_values_are_not_errors():
    assert validate(None, 1, 10000) is None
    assert validate("", 1, 10000) is None
    assert validate("   ", 1, 10000) is None


def test_non_numeric_input():
    assert validate("abc", 1, 10000) == INVALID_NUMBER
    assert validate("nan", 1, 10000) == INVALID_NUMBER


def test_range_errors_name_the_bound():
    assert validate(0, 1, 10000) == "Value must be at least 1μm"
    assert validate(10001, 1, 10000) == "Value must not exceed 10000μm"
    assert validate(5, 10, 200) == "Value must be at least 10μm"


def test_bounds_are_inclusive():
    assert validate(1, 1, 10000) is None
    assert validate("10000", 1, 10000) is None
    assert validate(" 42.5 ", 1, 10000) is None


def test_parse_number():
    assert parse_number("12.5") == 12.5
    assert parse_number(True) is None
    assert parse_number("inf") is None


def test_validation_errors_per_field():
    state = InputState(manual_pixel_x="abc", manual_pixel_y=None, layer_height=300)
    errors = validation_errors(state, CalculatorSettings())
    assert errors == {
        "manual_pixel_x": INVALID_NUMBER,
        "manual_pixel_y": None,
        "layer_height": "Value must not exceed 200μm",
    }
    assert not is_valid(errors)


def test_default_state_is_valid():
    assert is_valid(validation_errors(InputState()))


def test_manual_fields_ignored_while_printer_selected():
    printer = Printer("mars-3", "Elegoo", "Mars 3", 35.0, 35.0)
    state = InputState(selected_printer=printer, manual_pixel_x="abc", manual_pixel_y=20000)
    errors = validation_errors(state)
    assert errors["manual_pixel_x"] is None
    assert errors["manual_pixel_y"] is None
    assert is_valid(errors)
