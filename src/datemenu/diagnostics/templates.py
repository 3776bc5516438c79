"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps messages testable and documents every error case in one place.
    """

    _CLDR_DATES_URL = "https://www.unicode.org/reports/tr35/tr35-dates.html"

    @staticmethod
    def locale_unknown(locale_code: str, reason: str) -> Diagnostic:
        """Locale code not recognized by Babel.

        Args:
            locale_code: The locale code as supplied by the caller
            reason: Underlying Babel error text

        Returns:
            Diagnostic for LOCALE_UNKNOWN
        """
        msg = f"Unknown locale '{locale_code}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_UNKNOWN,
            message=msg,
            hint="Use a BCP-47 tag such as 'en-US' or switch back to the default locale",
            locale_code=locale_code,
        )

    @staticmethod
    def timezone_unknown(timezone: str) -> Diagnostic:
        """Time zone name not resolvable.

        Args:
            timezone: The zone name as supplied by the caller

        Returns:
            Diagnostic for TIMEZONE_UNKNOWN
        """
        msg = f"Unknown time zone '{timezone}'"
        return Diagnostic(
            code=DiagnosticCode.TIMEZONE_UNKNOWN,
            message=msg,
            hint="Use an IANA zone name such as 'Europe/Berlin' or an offset like '+02:00'",
            timezone=timezone,
        )

    @staticmethod
    def calendar_unsupported(calendar: str, formatter_key: str | None = None) -> Diagnostic:
        """Calendar system not supported by the formatter.

        Args:
            calendar: The requested calendar identifier
            formatter_key: Formatter variant that rejected the calendar

        Returns:
            Diagnostic for CALENDAR_UNSUPPORTED
        """
        msg = f"Calendar '{calendar}' is not supported"
        return Diagnostic(
            code=DiagnosticCode.CALENDAR_UNSUPPORTED,
            message=msg,
            hint="Only Gregorian calendars ('gregory', 'iso8601') can be rendered",
            formatter_key=formatter_key,
        )

    @staticmethod
    def setting_invalid(name: str, value: object, reason: str) -> Diagnostic:
        """Persisted setting holds an unusable value.

        Args:
            name: Setting key
            value: Offending value
            reason: Why the value was rejected

        Returns:
            Diagnostic for SETTING_INVALID
        """
        msg = f"Invalid value {value!r} for setting '{name}': {reason}"
        return Diagnostic(code=DiagnosticCode.SETTING_INVALID, message=msg)

    @staticmethod
    def formatting_failed(
        pattern: str,
        reason: str,
        *,
        locale_code: str | None = None,
        timezone: str | None = None,
    ) -> Diagnostic:
        """Rendering a pattern raised inside the locale formatter.

        Args:
            pattern: Pattern being rendered
            reason: Underlying error text
            locale_code: Locale in effect
            timezone: Time zone in effect

        Returns:
            Diagnostic for FORMATTING_FAILED
        """
        msg = f"Formatting failed: {reason}"
        return Diagnostic(
            code=DiagnosticCode.FORMATTING_FAILED,
            message=msg,
            pattern=pattern,
            locale_code=locale_code,
            timezone=timezone,
        )

    @staticmethod
    def no_renderer(
        pattern: str, locale_code: str | None = None, skeleton: str | None = None
    ) -> Diagnostic:
        """No renderer could be compiled for the pattern.

        Args:
            pattern: Pattern that produced no renderer
            locale_code: Locale in effect
            skeleton: Skeleton the locale had no format for, if fields were found

        Returns:
            Diagnostic for NO_RENDERER
        """
        if skeleton:
            msg = f"No locale format matches skeleton '{skeleton}'"
        else:
            msg = "Pattern does not select any date or time field"
        return Diagnostic(
            code=DiagnosticCode.NO_RENDERER,
            message=msg,
            hint="Prefix the pattern with '#' to use explicit field letters",
            help_url=f"{ErrorTemplate._CLDR_DATES_URL}#Date_Field_Symbol_Table",
            pattern=pattern,
            locale_code=locale_code,
        )

    @staticmethod
    def pattern_invalid(pattern: str, reason: str) -> Diagnostic:
        """Pattern rejected by a token-table formatter.

        Args:
            pattern: Offending pattern
            reason: Underlying error text

        Returns:
            Diagnostic for PATTERN_INVALID
        """
        msg = f"Invalid pattern: {reason}"
        return Diagnostic(code=DiagnosticCode.PATTERN_INVALID, message=msg, pattern=pattern)

    @staticmethod
    def formatter_not_found(key: str) -> Diagnostic:
        """Formatter key not present in the registry.

        Args:
            key: Requested registry key

        Returns:
            Diagnostic for FORMATTER_NOT_FOUND
        """
        msg = f"Formatter '{key}' is not registered"
        return Diagnostic(
            code=DiagnosticCode.FORMATTER_NOT_FOUND,
            message=msg,
            hint="Call FormatterRegistry.as_list() to see the available formatters",
            formatter_key=key,
        )

    @staticmethod
    def formatter_duplicate(key: str) -> Diagnostic:
        """Formatter key registered twice.

        Args:
            key: Registry key already in use

        Returns:
            Diagnostic for FORMATTER_DUPLICATE
        """
        msg = f"Formatter '{key}' is already registered"
        return Diagnostic(
            code=DiagnosticCode.FORMATTER_DUPLICATE,
            message=msg,
            formatter_key=key,
        )

    @staticmethod
    def discovery_failed(reason: str) -> Diagnostic:
        """Registry load failed as a whole.

        Args:
            reason: Underlying error text

        Returns:
            Diagnostic for DISCOVERY_FAILED
        """
        msg = f"Formatter discovery failed: {reason}"
        return Diagnostic(code=DiagnosticCode.DISCOVERY_FAILED, message=msg)

    @staticmethod
    def registry_not_loaded() -> Diagnostic:
        """Registry queried before load() completed.

        Returns:
            Diagnostic for REGISTRY_NOT_LOADED
        """
        return Diagnostic(
            code=DiagnosticCode.REGISTRY_NOT_LOADED,
            message="Formatter registry has not been loaded",
            hint="Await FormatterRegistry.load() before selecting a formatter",
        )
