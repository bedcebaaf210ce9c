from report_checker.models import ParseError


class ReportCheckerError(Exception):
    pass


class ReportParseError(ReportCheckerError):
    """Raised by FilenameParser.parse_or_raise; wraps the ParseError value."""

    def __init__(self, error: ParseError):
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self):
        return self.error.kind


class RosterError(ReportCheckerError):
    pass
