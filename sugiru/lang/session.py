"""Session control for the sugiru language. Feeds source to the lexer/parser/evaluator pipeline, either a line at a time
in command-line mode or a whole file in file interpretation mode, and keeps the top-level bindings alive between
chunks of source.

A chunk is one or more physical lines: a line that leaves "(" or "{" unclosed is joined with the lines after it.
"""

from sugiru.lang.error import ParseError, SugiruException
from sugiru.lang.evaluator import evaluate
from sugiru.lang.lexical import Lexer
from sugiru.lang.objects import Environment
from sugiru.lang.parser import Parser
from sugiru.lang.tokens import TokenType


class Session:
    """Governs a sugiru session, with control over the top-level environment."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = "//"

    EVAL = "eval"      # print evaluated values
    TOKENS = "tokens"  # print the token stream of each chunk
    AST = "ast"        # print the syntax tree of each chunk
    MODES = (EVAL, TOKENS, AST)

    def __init__(self, error_handler, path, cmd_line, mode=EVAL):
        if mode not in Session.MODES:
            raise SugiruException("'{}' is not a valid mode", mode, diagnosis=False)

        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.mode = mode

        self.env = Environment()  # bindings shared by every chunk of this session
        self.to_exec = {}         # dict of line num: Programs to evaluate
        self.results = []         # printable output, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            chunks = []
            prev = ""
            start = 1

            try:
                with open(path, "r", encoding="utf-8") as file:
                    for line_num, line in enumerate(file, start=1):
                        if not prev:
                            start = line_num
                        line, add_to_prev = Session.preprocess_line(line, prev)

                        if add_to_prev:
                            prev = line
                        else:
                            prev = ""
                            if line.strip():
                                chunks.append((line, start))
            except OSError:
                raise SugiruException("'{}' could not be opened", path, diagnosis=False)

            if prev.strip():
                chunks.append((prev, start))  # unterminated chunk: let the parser report what is missing

            for chunk, line_num in chunks:
                self.add(chunk, line_num)

        elif not cmd_line:
            raise SugiruException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, prev=""):
        """Strips comments and trailing whitespace from line and appends it to prev, the unfinished chunk so far (if
        any). Returns the updated chunk and whether or not it needs a continuation line.
        """
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]  # get rid of comments

        line = line.rstrip()
        if prev:
            line = prev + "\n" + line

        opened = line.count("(") + line.count("{")
        closed = line.count(")") + line.count("}")
        return line, opened > closed

    def add(self, source, line_num):
        """Adds a chunk of source to the current session. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        lexer = Lexer(source)

        if self.mode == Session.TOKENS:
            tokens = list(lexer)[:-1]  # drop EOF
            for token in tokens:
                if token.type is TokenType.ILLEGAL:
                    self.error_handler.warn("illegal character '{}'", token.literal, diagnosis=False)
            self.results.append("\n".join(str(token) for token in tokens))

        else:
            parser = Parser(lexer)
            program = parser.parse_program()
            if parser.errors:
                raise ParseError(parser.errors, source)

            if self.mode == Session.AST:
                self.results.append(program.display())
            else:
                self.to_exec[line_num] = program

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates this session's pending programs in order against the session environment. Will raise any errors
        that are encountered; the failing program is discarded either way.
        """
        for line_num, program in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, str(program), line_num)

            try:
                value = evaluate(program, self.env)
            finally:
                del self.to_exec[line_num]

            if value is not None:
                self.results.append(value.inspect())

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the oldest pending result."""
        return self.results.pop(0)
