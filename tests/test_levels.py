import pytest

from fieldlog.errors import ConfigurationError
from fieldlog.levels import Severity


class TestSeverity:
    def test_ordering(self):
        assert Severity.ERROR > Severity.INFO > Severity.DEBUG

    def test_python_compatible_values(self):
        assert Severity.DEBUG == 10
        assert Severity.INFO == 20
        assert Severity.ERROR == 40

    def test_label(self):
        assert [s.label for s in Severity] == ["debug", "info", "error"]

    @pytest.mark.parametrize("value", ["info", "INFO", " Info ", 20, Severity.INFO])
    def test_parse(self, value):
        assert Severity.parse(value) is Severity.INFO

    @pytest.mark.parametrize("value", ["warning", "", 30, True, 2.0, None])
    def test_parse_invalid(self, value):
        with pytest.raises(ConfigurationError, match="Invalid log level"):
            Severity.parse(value)
