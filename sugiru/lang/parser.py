"""Pratt parser for the sugiru language. Statements are parsed by recursive descent; expressions by precedence climbing
over per-token prefix/infix handlers.

Parsing never raises. A construct that is missing a required piece yields None in place of its node and a message is
appended to Parser.errors; parsing then carries on with the next statement so that several mistakes in one program are
reported together.
"""

from enum import IntEnum

from sugiru.lang.tokens import TokenType
from sugiru.lang import syntax


INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class Precedence(IntEnum):
    """Binding power of operators. Order matters: higher binds tighter."""
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x)


PRECEDENCES = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}


class Parser:
    """Builds a Program from the tokens of a Lexer, two tokens at a time (cur_token and peek_token)."""

    def __init__(self, lexer):
        self.lexer = lexer
        self.errors = []

        self.cur_token = None
        self.peek_token = None

        self.prefix_parse_fns = {}
        self.infix_parse_fns = {}

        self.register_prefix(TokenType.IDENT, self.parse_identifier)
        self.register_prefix(TokenType.INT, self.parse_integer_literal)
        self.register_prefix(TokenType.TRUE, self.parse_boolean)
        self.register_prefix(TokenType.FALSE, self.parse_boolean)
        self.register_prefix(TokenType.BANG, self.parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self.parse_prefix_expression)
        self.register_prefix(TokenType.LPAREN, self.parse_grouped_expression)
        self.register_prefix(TokenType.IF, self.parse_if_expression)
        self.register_prefix(TokenType.FUNCTION, self.parse_function_literal)

        for token_type in PRECEDENCES:
            self.register_infix(token_type, self.parse_infix_expression)
        self.register_infix(TokenType.LPAREN, self.parse_call_expression)

        # fill both cur_token and peek_token
        self.next_token()
        self.next_token()

    def register_prefix(self, token_type, fn):
        self.prefix_parse_fns[token_type] = fn

    def register_infix(self, token_type, fn):
        self.infix_parse_fns[token_type] = fn

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type):
        return self.cur_token.type is token_type

    def peek_token_is(self, token_type):
        return self.peek_token.type is token_type

    def expect_peek(self, token_type):
        """Advances onto peek_token if it is of token_type. Otherwise records an error and stays put."""
        if self.peek_token_is(token_type):
            self.next_token()
            return True
        self.peek_error(token_type)
        return False

    def peek_error(self, token_type):
        peek = self.peek_token
        self.errors.append(f"expected next token to be {token_type}, got {peek.type} ('{peek.literal}') instead")

    def no_prefix_parse_fn_error(self, token_type):
        self.errors.append(f"no prefix parse function for {token_type} found")

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self):
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # statements

    def parse_program(self):
        """Parses statements until EOF. Statements that failed to parse are dropped; see self.errors."""
        program = syntax.Program()

        while not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()

        return program

    def parse_statement(self):
        if self.cur_token_is(TokenType.LET):
            return self.parse_let_statement()
        elif self.cur_token_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        """let <IDENT> = <expression> [;]"""
        stmt = syntax.LetStatement(self.cur_token)

        if not self.expect_peek(TokenType.IDENT):
            return None
        stmt.name = syntax.Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            return None

        self.next_token()
        stmt.value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return stmt

    def parse_return_statement(self):
        stmt = syntax.ReturnStatement(self.cur_token)

        self.next_token()
        stmt.return_value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return stmt

    def parse_expression_statement(self):
        stmt = syntax.ExpressionStatement(self.cur_token)
        stmt.expression = self.parse_expression(Precedence.LOWEST)

        # semicolon is optional so that one-liners work in the shell
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return stmt

    def parse_block_statement(self):
        """Parses statements after the current "{" up to the matching "}" (or EOF). Leaves cur_token on "}"."""
        block = syntax.BlockStatement(self.cur_token)
        self.next_token()

        while not self.cur_token_is(TokenType.RBRACE) and not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()

        return block

    # expressions

    def parse_expression(self, precedence):
        """Precedence climbing: builds the prefix expression at cur_token, then keeps folding it into the left operand
        of any following infix operator that binds tighter than precedence.
        """
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None

        left = prefix()

        while not self.peek_token_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return syntax.Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self):
        literal = self.cur_token.literal
        try:
            value = int(literal, 10)
            if not INT64_MIN <= value <= INT64_MAX:
                raise ValueError(literal)
        except ValueError:
            self.errors.append(f"could not parse '{literal}' as integer")
            return None

        return syntax.IntegerLiteral(self.cur_token, value)

    def parse_boolean(self):
        return syntax.Boolean(self.cur_token, self.cur_token_is(TokenType.TRUE))

    def parse_prefix_expression(self):
        expression = syntax.PrefixExpression(self.cur_token, self.cur_token.literal)

        self.next_token()
        expression.right = self.parse_expression(Precedence.PREFIX)
        return expression

    def parse_infix_expression(self, left):
        expression = syntax.InfixExpression(self.cur_token, left, self.cur_token.literal)

        # operator's own precedence must be read before moving past it
        precedence = self.cur_precedence()
        self.next_token()
        expression.right = self.parse_expression(precedence)
        return expression

    def parse_grouped_expression(self):
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self):
        expression = syntax.IfExpression(self.cur_token)

        if not self.expect_peek(TokenType.LPAREN):
            return None

        self.next_token()
        expression.condition = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None

        expression.then = self.parse_block_statement()

        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            expression.else_ = self.parse_block_statement()

        return expression

    def parse_function_literal(self):
        function = syntax.FunctionLiteral(self.cur_token)

        if not self.expect_peek(TokenType.LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        function.parameters = parameters

        if not self.expect_peek(TokenType.LBRACE):
            return None

        function.body = self.parse_block_statement()
        return function

    def parse_function_parameters(self):
        """Parses "<ident>, <ident>, ... )" after the current "(". Returns None on malformed lists."""
        identifiers = []

        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TokenType.IDENT):
            return None
        identifiers.append(syntax.Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            identifiers.append(syntax.Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function):
        expression = syntax.CallExpression(self.cur_token, function)

        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        expression.arguments = arguments
        return expression

    def parse_call_arguments(self):
        """Parses "<expression>, <expression>, ... )" after the current "(". Returns None if ")" is missing."""
        args = []

        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return args

        self.next_token()
        args.append(self.parse_expression(Precedence.LOWEST))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            args.append(self.parse_expression(Precedence.LOWEST))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return args
