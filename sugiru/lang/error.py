"""Error handling for the sugiru language. Only SugiruExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class SugiruException(Exception):
    """Templates an error/warning message so that it can be used to throw a sugiru error/warning. exprs are the source
    snippets substituted into msg; exprs[0] is the offending snippet, underlined from start to end when displayed.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.raw_msg = msg.format(*exprs)
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.raw_msg)


class ParseError(SugiruException):
    """All of the messages a Parser collected for one chunk of source, reported together."""

    def __init__(self, errors, source):
        self.errors = list(errors)
        msg = "could not parse '{}'"
        for error in self.errors:
            msg += "\n  - " + error.replace("{", "{{").replace("}", "}}")  # errors may quote brace tokens
        super().__init__(msg, source, diagnosis=False)


class EvaluationError(SugiruException):
    """Runtime fault the evaluator cannot express as a value: division by zero, unbound names, bad calls."""

    def __init__(self, msg, node=None, *details):
        """msg's first placeholder is filled with the offending node's source text, the rest with details."""
        self.node = node
        exprs = [str(node) if node is not None else "", *(str(detail) for detail in details)]
        super().__init__(msg, exprs, diagnosis=node is not None)


class ErrorHandler:
    """Context manager that reports the SugiruExceptions raised inside it. When fatal (file interpretation), a reported
    error ends the process; otherwise the registered lines are cleared and the caller carries on.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}  # file: (line, line_num) being processed, outermost file first

    def register_file(self, path):
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Marks line as the one path is processing. Session does this before each add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        self.traceback[path] = (None, None)

    def frames(self):
        """Returns (file, line, line_num) for every file with a registered line."""
        return [(file, line, line_num) for file, (line, line_num) in self.traceback.items() if line]

    @staticmethod
    def diagnose(error, color):
        """Returns error.expr with the offending span bolded and underlined by a caret."""
        end = max(error.end, error.start + 1)

        diagnosis = "  " + error.expr[:error.start]
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"
        diagnosis += "  " + " " * error.start + colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])
        return diagnosis

    @staticmethod
    def report(header, label, error, color):
        print(header + colored(label, color, attrs=["bold"]) + error.msg)
        if error.diagnosis and error.expr and not error.internal:
            print(ErrorHandler.diagnose(error, color))

    def warn(self, *args, **kwargs):
        """Prints a warning built from args (see SugiruException) and continues."""
        frames = self.frames()
        location = f"{frames[-1][0]}:{frames[-1][2]}: " if frames else ""
        ErrorHandler.report(colored(location, attrs=["bold"]), "warning: ", SugiruException(*args, **kwargs),
                            ErrorHandler.WARNING)

    def throw(self, error):
        """Prints error under a header naming the registered lines, then exits (fatal) or clears them."""
        frames = self.frames()

        header = "".join(f"  File '{file}', line {line_num}:\n    {line}\n" for file, line, line_num in frames)
        if len(frames) > 1:
            header = "Traceback:\n" + header
        if error.internal:
            header += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        ErrorHandler.report(header, "error: ", error, ErrorHandler.ERROR)

        if self.fatal:
            sys.exit(1)
        for file in self.traceback:
            self.remove_line(file)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False

        if issubclass(exc_type, SugiruException):
            self.throw(exc_val)
        elif exc_type is KeyboardInterrupt:
            self.throw(SugiruException("keyboard interrupt"))
        elif exc_type is RecursionError:
            self.throw(SugiruException("maximum recursion depth exceeded"))
        else:
            self.throw(SugiruException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            return False  # internal errors are not suppressed
        return True
