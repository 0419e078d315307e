from typing import Any, Dict

from minirepl.errors import RuntimeFault
from minirepl.tokens import Token


class Environment:
    """Maps variable names to runtime values for a whole session.

    There is a single flat scope. A name comes into existence when a
    `let` declaration runs and may be redeclared later; reading or
    assigning a name that was never declared is a runtime fault.
    """
    def __init__(self):
        self.values: Dict[str, Any] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def define(self, name: str, value: Any):
        self.values[name] = value

    def get(self, name: Token) -> Any:
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        raise RuntimeFault(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name: Token, value: Any):
        if name.lexeme not in self.values:
            raise RuntimeFault(name, f"Undefined variable '{name.lexeme}'.")
        self.values[name.lexeme] = value
