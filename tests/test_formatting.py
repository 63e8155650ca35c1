from meat_core.formatting import format_count, format_currency, format_weight_kg, round_half_up


def test_currency_rounds_half_up():
    assert format_currency(18464.91) == "EGP 18,465"
    assert format_currency(2.5) == "EGP 3"
    assert format_currency(0) == "EGP 0"
    assert format_currency(None) == "N/A"


def test_weight_and_count():
    assert format_weight_kg(307.08) == "307 kg"
    assert format_count(1234) == "1,234"
    assert round_half_up(0.125, 2) == 0.13
