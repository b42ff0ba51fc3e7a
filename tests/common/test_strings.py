from src.hr_dashboard.hr_dashboard.common.strings import capitalize_name


def test_capitalize_name():
    assert capitalize_name("  jane   DOE ") == "Jane Doe"
    assert capitalize_name("") == ""
    assert capitalize_name(None) == ""
