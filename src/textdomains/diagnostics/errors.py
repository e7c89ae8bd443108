"""textdomains exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object; the
Diagnostic is kept on the exception for tooling.

Hierarchy:
    TranslationError
    ├─ TranslationFileNotFoundError (also a builtin FileNotFoundError)
    ├─ TranslationParseError
    ├─ CircularReferenceError
    │  ├─ CircularExtensionError
    │  ├─ CircularFallbackError
    │  └─ CircularAliasError
    ├─ DepthLimitExceededError
    └─ NoTranslationFoundError (strict mode only)

Python 3.13+.
"""

from collections.abc import Sequence

from .codes import Diagnostic


class TranslationError(Exception):
    """Base exception for all textdomains errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TranslationError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class TranslationFileNotFoundError(TranslationError, FileNotFoundError):
    """A translation source file is absent or unreadable.

    Subclasses the builtin FileNotFoundError so callers that already catch
    OS-level misses keep working.

    Attributes:
        path: The file that could not be opened
    """

    def __init__(self, message: str | Diagnostic, *, path: str = "") -> None:
        """Initialize TranslationFileNotFoundError.

        Args:
            message: Error message string OR Diagnostic object
            path: The file that could not be opened
        """
        super().__init__(message)
        self.path = path


class TranslationParseError(TranslationError):
    """Malformed translation source file.

    Always fatal: skipping a broken file would silently drop translations.

    Attributes:
        path: File that failed to parse
        detail: Underlying parser message
        line: 1-indexed line number, when known
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        path: str = "",
        detail: str = "",
        line: int | None = None,
    ) -> None:
        """Initialize TranslationParseError.

        Args:
            message: Error message string OR Diagnostic object
            path: File that failed to parse
            detail: Underlying parser message
            line: 1-indexed line number, when known
        """
        super().__init__(message)
        self.path = path
        self.detail = detail
        self.line = line


class CircularReferenceError(TranslationError):
    """A chain revisited one of its own members.

    Attributes:
        chain: Identities from the original request to the repeated one,
            repeated identity included as the last element
    """

    def __init__(self, message: str | Diagnostic, *, chain: Sequence[object] = ()) -> None:
        """Initialize CircularReferenceError.

        Args:
            message: Error message string OR Diagnostic object
            chain: Offending chain, outermost first
        """
        super().__init__(message)
        self.chain: tuple[str, ...] = tuple(str(item) for item in chain)


class CircularExtensionError(CircularReferenceError):
    """A translation file extends itself, directly or transitively.

    Example:
        a.ini: @parent_ini = "b.ini"
        b.ini: @parent_ini = "a.ini"  <- a.ini -> b.ini -> a.ini
    """


class CircularFallbackError(CircularReferenceError):
    """The configured locale fallback map loops (en -> fi -> en)."""


class CircularAliasError(CircularReferenceError):
    """Alias definitions resolve to each other without reaching a value."""


class DepthLimitExceededError(TranslationError):
    """Raised when an inheritance or alias chain exceeds the depth limit.

    Indicates either a malformed configuration or adversarial input built to
    exhaust the stack without forming a cycle.
    """


class NoTranslationFoundError(TranslationError):
    """No file matched any probed locale/directory combination.

    Only raised by resolvers in strict mode; otherwise the outcome is
    reported as ResolutionStatus.NO_TRANSLATION_FOUND with an empty domain.

    Attributes:
        locale: Requested locale
        text_domain: Requested text domain
        locales_tried: Every locale probed, in order
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        locale: str = "",
        text_domain: str = "",
        locales_tried: Sequence[str] = (),
    ) -> None:
        """Initialize NoTranslationFoundError.

        Args:
            message: Error message string OR Diagnostic object
            locale: Requested locale
            text_domain: Requested text domain
            locales_tried: Every locale probed, in order
        """
        super().__init__(message)
        self.locale = locale
        self.text_domain = text_domain
        self.locales_tried = tuple(locales_tried)
