"""Abstract syntax tree for the sugiru language.

```
<program>    ::= <statement>*
<statement>  ::= "let" <ident> "=" <expression> [";"]
               | "return" <expression> [";"]
               | <expression> [";"]
<block>      ::= "{" <statement>* "}"
<expression> ::= <ident> | <int> | "true" | "false"
               | ("!" | "-") <expression>
               | <expression> <operator> <expression>
               | "(" <expression> ")"
               | "if" "(" <expression> ")" <block> ["else" <block>]
               | "fn" "(" [<ident> ("," <ident>)*] ")" <block>
               | <expression> "(" [<expression> ("," <expression>)*] ")"
```

Nodes form a strict tree built by the Parser. Every node keeps the Token it was created from; token_literal is only
used for diagnostics. str(node) renders canonical source with every prefix/infix expression parenthesised, which makes
operator binding visible: "-a * b" renders as "((-a) * b)".
"""

from abc import ABC, abstractmethod


class Node(ABC):
    """Superclass of every AST node."""

    def __init__(self, token):
        self.token = token
        self._cls = type(self).__name__

    def token_literal(self):
        return self.token.literal

    @property
    @abstractmethod
    def nodes(self):
        """Child nodes in source order. Children the parser failed to build (None) are left out."""

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Node>(expr='<expr>', nodes=[
            <Node>(expr='<expr>', nodes=[
                ...
                <Node>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{self._cls}(expr='{self}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    @abstractmethod
    def __str__(self):
        ...

    def __repr__(self):
        return f"{self._cls}('{self}')"


class Statement(Node, ABC):
    """Node that appears in a statement sequence."""


class Expression(Node, ABC):
    """Node that produces a value when evaluated."""


def _present(*nodes):
    return [node for node in nodes if node is not None]


def _text(node):
    return "" if node is None else str(node)


class Program(Node):
    """Root of every AST."""

    def __init__(self, statements=None):
        super().__init__(None)
        self.statements = statements if statements is not None else []

    def token_literal(self):
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    @property
    def nodes(self):
        return list(self.statements)

    def __str__(self):
        return "".join(str(stmt) for stmt in self.statements)


class Identifier(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    @property
    def nodes(self):
        return []

    def __str__(self):
        return self.value


class IntegerLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    @property
    def nodes(self):
        return []

    def __str__(self):
        return self.token.literal


class Boolean(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    @property
    def nodes(self):
        return []

    def __str__(self):
        return self.token.literal


class LetStatement(Statement):
    """let <name> = <value>;"""

    def __init__(self, token, name=None, value=None):
        super().__init__(token)
        self.name = name
        self.value = value

    @property
    def nodes(self):
        return _present(self.name, self.value)

    def __str__(self):
        return f"{self.token_literal()} {_text(self.name)} = {_text(self.value)};"


class ReturnStatement(Statement):

    def __init__(self, token, return_value=None):
        super().__init__(token)
        self.return_value = return_value

    @property
    def nodes(self):
        return _present(self.return_value)

    def __str__(self):
        return f"{self.token_literal()} {_text(self.return_value)};"


class ExpressionStatement(Statement):
    """Wraps an expression used at statement level, e.g. a bare "x + 10" line."""

    def __init__(self, token, expression=None):
        super().__init__(token)
        self.expression = expression

    @property
    def nodes(self):
        return _present(self.expression)

    def __str__(self):
        return _text(self.expression)


class BlockStatement(Statement):

    def __init__(self, token, statements=None):
        super().__init__(token)
        self.statements = statements if statements is not None else []

    @property
    def nodes(self):
        return list(self.statements)

    def __str__(self):
        return "".join(str(stmt) for stmt in self.statements)


class PrefixExpression(Expression):

    def __init__(self, token, operator, right=None):
        super().__init__(token)
        self.operator = operator
        self.right = right

    @property
    def nodes(self):
        return _present(self.right)

    def __str__(self):
        return f"({self.operator}{_text(self.right)})"


class InfixExpression(Expression):

    def __init__(self, token, left, operator, right=None):
        super().__init__(token)
        self.left = left
        self.operator = operator
        self.right = right

    @property
    def nodes(self):
        return _present(self.left, self.right)

    def __str__(self):
        return f"({_text(self.left)} {self.operator} {_text(self.right)})"


class IfExpression(Expression):
    """if (<condition>) { <then> } else { <else_> }. else_ is None when there is no else branch."""

    def __init__(self, token, condition=None, then=None, else_=None):
        super().__init__(token)
        self.condition = condition
        self.then = then
        self.else_ = else_

    @property
    def nodes(self):
        return _present(self.condition, self.then, self.else_)

    def __str__(self):
        result = f"if{_text(self.condition)} {_text(self.then)}"
        if self.else_ is not None:
            result += f"else {self.else_}"
        return result


class FunctionLiteral(Expression):

    def __init__(self, token, parameters=None, body=None):
        super().__init__(token)
        self.parameters = parameters if parameters is not None else []
        self.body = body

    @property
    def nodes(self):
        return _present(*self.parameters, self.body)

    def __str__(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"{self.token_literal()}({params}) {_text(self.body)}"


class CallExpression(Expression):
    """<function>(<arguments>). function is an Identifier or a FunctionLiteral (or any expression yielding one)."""

    def __init__(self, token, function, arguments=None):
        super().__init__(token)
        self.function = function
        self.arguments = arguments if arguments is not None else []

    @property
    def nodes(self):
        return _present(self.function, *self.arguments)

    def __str__(self):
        args = ", ".join(_text(arg) for arg in self.arguments)
        return f"{_text(self.function)}({args})"
