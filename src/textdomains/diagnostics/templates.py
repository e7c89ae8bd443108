"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+.
"""

from collections.abc import Sequence

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and gives one inventory of every failure the
    engine can report.
    """

    @staticmethod
    def _render_chain(chain: Sequence[object]) -> tuple[str, ...]:
        return tuple(str(item) for item in chain)

    @staticmethod
    def file_not_found(path: object) -> Diagnostic:
        """Translation source file does not exist.

        Args:
            path: The path that was looked up

        Returns:
            Diagnostic for FILE_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.FILE_NOT_FOUND,
            message=f"Translation file not found: {path}",
            hint="Check the search directories and any @extends / @parent_ini directives",
            path=str(path),
        )

    @staticmethod
    def file_unreadable(path: object, reason: str) -> Diagnostic:
        """Translation source file exists but cannot be read.

        Args:
            path: The file that failed to open
            reason: Underlying OS error text

        Returns:
            Diagnostic for FILE_UNREADABLE
        """
        return Diagnostic(
            code=DiagnosticCode.FILE_UNREADABLE,
            message=f"Translation file could not be read: {path}: {reason}",
            hint="Check file permissions and encoding (UTF-8 expected)",
            path=str(path),
        )

    @staticmethod
    def parse_failed(path: object, detail: str, line: int | None = None) -> Diagnostic:
        """Malformed translation source.

        Args:
            path: File that failed to parse
            detail: Parser message
            line: 1-indexed line, when known

        Returns:
            Diagnostic for PARSE_FAILED
        """
        location = f"{path}:{line}" if line is not None else str(path)
        return Diagnostic(
            code=DiagnosticCode.PARSE_FAILED,
            message=f"Could not parse {location}: {detail}",
            path=str(path),
            line=line,
        )

    @staticmethod
    def unsupported_format(path: object) -> Diagnostic:
        """File suffix does not map to a known loader.

        Args:
            path: The offending file

        Returns:
            Diagnostic for UNSUPPORTED_FORMAT
        """
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_FORMAT,
            message=f"Unsupported translation file format: {path}",
            hint="Use .ini, .yaml or .yml",
            path=str(path),
        )

    @staticmethod
    def invalid_directive(path: object, key: str, detail: str) -> Diagnostic:
        """An inheritance directive has an unusable value.

        Args:
            path: File declaring the directive
            key: Directive key (e.g. '@extends')
            detail: What is wrong with the value

        Returns:
            Diagnostic for INVALID_DIRECTIVE
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_DIRECTIVE,
            message=f"Invalid {key} directive in {path}: {detail}",
            hint=f"{key} takes a file name or a list of file names",
            path=str(path),
        )

    @staticmethod
    def circular_extension(chain: Sequence[object]) -> Diagnostic:
        """A file extends itself, directly or transitively.

        Args:
            chain: Files from the original request to the repeated file

        Returns:
            Diagnostic for CIRCULAR_EXTENSION
        """
        rendered = ErrorTemplate._render_chain(chain)
        return Diagnostic(
            code=DiagnosticCode.CIRCULAR_EXTENSION,
            message=f"Circular extension: {' -> '.join(rendered)}",
            hint="Remove one of the @extends / @parent_ini / @parent_yaml directives",
            path=rendered[-1] if rendered else None,
            chain=rendered,
        )

    @staticmethod
    def missing_parent(path: object, parent: object) -> Diagnostic:
        """A file declares a parent that does not exist.

        Args:
            path: File declaring the parent
            parent: Location the parent was expected at

        Returns:
            Diagnostic for FILE_NOT_FOUND naming the declaring file
        """
        return Diagnostic(
            code=DiagnosticCode.FILE_NOT_FOUND,
            message=f"Parent file not found: {parent}",
            hint="Fix the directive or add the file to a search directory",
            path=str(path),
        )

    @staticmethod
    def circular_fallback(chain: Sequence[object]) -> Diagnostic:
        """The locale fallback map loops.

        Args:
            chain: Locales from the requested one to the repeated one

        Returns:
            Diagnostic for CIRCULAR_FALLBACK
        """
        rendered = ErrorTemplate._render_chain(chain)
        return Diagnostic(
            code=DiagnosticCode.CIRCULAR_FALLBACK,
            message=f"Circular locale fallback: {' -> '.join(rendered)}",
            hint="Every fallback chain must end in a locale without a further entry",
            chain=rendered,
        )

    @staticmethod
    def circular_alias(chain: Sequence[object]) -> Diagnostic:
        """Alias definitions point at each other.

        Args:
            chain: 'domain::key' identities in resolution order

        Returns:
            Diagnostic for CIRCULAR_ALIAS
        """
        rendered = ErrorTemplate._render_chain(chain)
        return Diagnostic(
            code=DiagnosticCode.CIRCULAR_ALIAS,
            message=f"Circular alias detected resolving {' -> '.join(rendered)}",
            hint="Point the alias at a key that has a translation",
            chain=rendered,
        )

    @staticmethod
    def depth_exceeded(max_depth: int, chain: Sequence[object] = ()) -> Diagnostic:
        """Inheritance or alias chain deeper than allowed.

        Args:
            max_depth: The configured limit
            chain: Identities entered when the limit was hit

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        rendered = ErrorTemplate._render_chain(chain)
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=f"Maximum chain depth ({max_depth}) exceeded",
            hint="Flatten the inheritance chain",
            chain=rendered or None,
        )

    @staticmethod
    def no_translation_found(
        locale: str, text_domain: str, locales_tried: Sequence[str]
    ) -> Diagnostic:
        """No source file matched any probed locale.

        Args:
            locale: Requested locale
            text_domain: Requested text domain
            locales_tried: Every locale probed, in order

        Returns:
            Diagnostic for NO_TRANSLATION_FOUND
        """
        tried = ", ".join(locales_tried) if locales_tried else locale
        return Diagnostic(
            code=DiagnosticCode.NO_TRANSLATION_FOUND,
            message=(
                f"No translation files for text domain '{text_domain}' "
                f"(locale '{locale}'; tried {tried})"
            ),
            hint="Add a language file or enable locale fallback",
            chain=tuple(locales_tried) or None,
            severity="warning",
        )
