"""Tests for FieldRule style selection and FieldResolver rendering."""

from datetime import UTC, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
from babel import Locale
from hypothesis import event, given

from datemenu.pattern import FIELD_RULES, STYLES, FieldResolver
from tests.strategies import aware_instants, padded_numeric_letters, run_lengths

EN = Locale.parse("en_US")
DE = Locale.parse("de_DE")

# 2023-04-04 is a Tuesday
TUESDAY = datetime(2023, 4, 4, 13, 5, 9, tzinfo=UTC)


def render(letter: str, length: int, instant: datetime, locale: Locale = EN) -> str:
    renderer = FieldResolver(locale, UTC).resolve(letter, length)
    assert renderer is not None
    return renderer(instant)


class TestFieldRule:
    """Run length to style index."""

    @pytest.mark.parametrize(
        ("letter", "length", "style"),
        [
            ("M", 1, "numeric"),
            ("M", 2, "2-digit"),
            ("M", 3, "short"),
            ("M", 4, "long"),
            ("M", 5, "narrow"),
            ("E", 1, "short"),
            ("E", 4, "long"),
            ("E", 5, "narrow"),
            ("c", 5, "narrow"),
            ("G", 1, "short"),
            ("d", 4, "2-digit"),
            ("V", 1, "long"),
            ("z", 1, "short"),
        ],
    )
    def test_style(self, letter: str, length: int, style: str) -> None:
        """Offsets and clamps select the documented style."""
        assert FIELD_RULES[letter].style(length) == style

    def test_year_callable_offset(self) -> None:
        """yy is 2-digit; every other year length is numeric."""
        rule = FIELD_RULES["y"]
        assert rule.style(2) == "2-digit"
        assert rule.style(1) == rule.style(3) == rule.style(4) == "numeric"

    def test_index_never_exceeds_styles(self) -> None:
        """Unclamped rules still stay inside STYLES."""
        assert FIELD_RULES["M"].style_index(9) == len(STYLES) - 1


class TestHours:
    """Hour letters and their zero rules."""

    def test_h24_midnight_is_24(self) -> None:
        """H renders midnight as 24."""
        midnight = datetime(2024, 1, 1, 0, 5, tzinfo=UTC)
        assert render("H", 1, midnight) == "24"
        assert render("H", 2, midnight) == "24"

    def test_h12_midnight_and_noon_are_12(self) -> None:
        """h renders both midnight and noon as 12."""
        assert render("h", 1, datetime(2024, 1, 1, 0, tzinfo=UTC)) == "12"
        assert render("h", 1, datetime(2024, 1, 1, 12, tzinfo=UTC)) == "12"

    def test_h12_afternoon(self) -> None:
        """h reduces afternoon hours by 12."""
        assert render("h", 1, TUESDAY) == "1"
        assert render("h", 2, TUESDAY) == "01"

    def test_k_letters(self) -> None:
        """K follows H at midnight then reduces; k is the raw hour."""
        midnight = datetime(2024, 1, 1, 0, tzinfo=UTC)
        assert render("K", 1, midnight) == "12"
        assert render("K", 1, TUESDAY) == "1"
        assert render("k", 1, midnight) == "0"
        assert render("k", 2, midnight) == "00"
        assert render("k", 2, TUESDAY) == "13"

    def test_hour_converted_to_zone(self) -> None:
        """Rendering happens in the resolver's time zone."""
        resolver = FieldResolver(EN, timezone(timedelta(hours=2)))
        renderer = resolver.resolve("H", 2)
        assert renderer is not None
        assert renderer(TUESDAY) == "15"


class TestPadding:
    """Numeric fields are zero-padded to the run length."""

    @given(letter=padded_numeric_letters, length=run_lengths, instant=aware_instants)
    def test_padded_to_run_length(self, letter: str, length: int, instant: datetime) -> None:
        """PROPERTY: Numeric fields render exactly run-length digits."""
        event(f"letter={letter}")
        rendered = render(letter, length, instant)
        assert len(rendered) == length
        assert rendered.isdigit()

    def test_five_digit_year(self) -> None:
        """yyyyy pads the year to five digits."""
        assert render("y", 5, TUESDAY) == "02023"

    def test_two_digit_year(self) -> None:
        """yy keeps the last two digits."""
        assert render("y", 2, TUESDAY) == "23"

    def test_day_padding(self) -> None:
        """ddd pads beyond the 2-digit style."""
        assert render("d", 1, TUESDAY) == "4"
        assert render("d", 3, TUESDAY) == "004"


class TestLocaleFields:
    """Names rendered through locale data."""

    @pytest.mark.parametrize(
        ("specifier", "expected"),
        [
            ("MM", "04"),
            ("MMM", "Apr"),
            ("MMMM", "April"),
            ("MMMMM", "A"),
            ("LLLL", "April"),
            ("EEE", "Tue"),
            ("EEEE", "Tuesday"),
            ("EEEEE", "T"),
            ("ccccc", "T"),
            ("EEEEEE", "Tu"),
            ("G", "AD"),
            ("GGGG", "Anno Domini"),
            ("a", "PM"),
            ("bbb", "PM"),
        ],
    )
    def test_english(self, specifier: str, expected: str) -> None:
        """English names for each style."""
        assert render(specifier[0], len(specifier), TUESDAY) == expected

    def test_german_names(self) -> None:
        """Names follow the resolver's locale."""
        assert render("E", 4, TUESDAY, DE) == "Dienstag"
        assert render("M", 4, datetime(2023, 3, 1, tzinfo=UTC), DE) == "März"

    def test_generic_zone_on_fixed_offset(self) -> None:
        """v on a zone without an IANA key renders the GMT offset."""
        resolver = FieldResolver(EN, timezone(timedelta(hours=1)))
        short = resolver.resolve("v", 1)
        long = resolver.resolve("v", 4)
        assert short is not None
        assert long is not None
        assert short(TUESDAY) == "+0100"
        assert long(TUESDAY) == "GMT+01:00"

    def test_generic_zone_on_utc(self) -> None:
        """UTC has no generic region name either."""
        renderer = FieldResolver(EN, UTC).resolve("v", 4)
        assert renderer is not None
        assert "Unknown" not in renderer(TUESDAY)

    def test_generic_zone_on_iana_zone(self) -> None:
        """IANA zones keep the generic name."""
        renderer = FieldResolver(EN, ZoneInfo("America/New_York")).resolve("v", 4)
        assert renderer is not None
        assert renderer(TUESDAY) == "Eastern Time"


class TestUnsupported:
    """Letters and lengths without a renderer."""

    @pytest.mark.parametrize("specifier", ["D", "U", "MMMMMM", "GGGGGG", "ffff"])
    def test_returns_none(self, specifier: str) -> None:
        """resolve() returns None instead of raising."""
        resolver = FieldResolver(EN, UTC)
        assert resolver.resolve(specifier[0], len(specifier)) is None

    def test_direct_letters_beyond_five(self) -> None:
        """Arithmetic fields have no length limit."""
        resolver = FieldResolver(EN, UTC)
        renderer = resolver.resolve("S", 6)
        assert renderer is not None
        assert renderer(TUESDAY) == "000000"

    def test_week_uses_first_weekday(self) -> None:
        """w honours the configured first weekday."""
        jan2 = datetime(2023, 1, 2, 12, tzinfo=UTC)
        sunday_first = FieldResolver(EN, UTC).resolve("w", 1)
        monday_first = FieldResolver(EN, UTC, first_weekday=0).resolve("w", 1)
        assert sunday_first is not None
        assert monday_first is not None
        assert sunday_first(jan2) == "1"
        assert monday_first(jan2) == "2"
