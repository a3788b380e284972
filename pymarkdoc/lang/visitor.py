"""AST visitor collecting the documented symbols of a module."""

import ast
from typing import List, Optional, Union

from .models import Func, Location, Type, Value

FunctionNode = Union[ast.FunctionDef, ast.AsyncFunctionDef]


def is_exported(name: str, member: bool = False) -> bool:
    """Check whether a name is part of the public surface.

    Dunder names count as exported on classes (``__init__``, ``__call__``)
    but never at module level (``__all__``, ``__version__``).
    """
    if name.startswith('__') and name.endswith('__'):
        return member
    return not name.startswith('_')


def _signature_of_function(node: FunctionNode) -> str:
    prefix = 'async def' if isinstance(node, ast.AsyncFunctionDef) else 'def'
    signature = f"{prefix} {node.name}({ast.unparse(node.args)})"
    if node.returns is not None:
        signature += f" -> {ast.unparse(node.returns)}"
    decorators = [f"@{ast.unparse(d)}" for d in node.decorator_list]
    return '\n'.join(decorators + [signature])


def _signature_of_class(node: ast.ClassDef) -> str:
    bases = [ast.unparse(b) for b in node.bases]
    bases += [ast.unparse(k) for k in node.keywords]
    if bases:
        return f"class {node.name}({', '.join(bases)})"
    return f"class {node.name}"


def _assigned_names(node: ast.stmt) -> List[str]:
    if isinstance(node, ast.Assign):
        targets = node.targets
    elif isinstance(node, ast.AnnAssign):
        targets = [node.target]
    else:
        return []

    names = []
    for target in targets:
        if isinstance(target, ast.Name):
            names.append(target.id)
        elif isinstance(target, ast.Tuple):
            names.extend(elt.id for elt in target.elts if isinstance(elt, ast.Name))
    return names


def _following_docstring(body: List[ast.stmt], index: int) -> str:
    """String literal placed directly after an assignment, if any."""
    if index + 1 >= len(body):
        return ''
    node = body[index + 1]
    if (
        isinstance(node, ast.Expr)
        and isinstance(node.value, ast.Constant)
        and isinstance(node.value.value, str)
    ):
        return ast.get_docstring(ast.Module(body=[node], type_ignores=[])) or ''
    return ''


class ModuleVisitor(ast.NodeVisitor):
    """Visit the top level of a module and collect its symbols.

    Function bodies are never entered. Class bodies are walked once, to
    collect methods and class attributes.
    """

    def __init__(self, file_name: str, include_unexported: bool = False):
        self.file_name = file_name
        self.include_unexported = include_unexported
        self.values: List[Value] = []
        self.funcs: List[Func] = []
        self.types: List[Type] = []

    def _location(self, node: ast.AST) -> Location:
        return Location(
            file=self.file_name,
            start=node.lineno,
            end=getattr(node, 'end_lineno', None) or node.lineno,
        )

    def _visible(self, name: str, member: bool = False) -> bool:
        if self.include_unexported:
            return True
        return is_exported(name, member=member)

    def visit_Module(self, node: ast.Module) -> None:
        for index, stmt in enumerate(node.body):
            if isinstance(stmt, (ast.Assign, ast.AnnAssign)):
                self.values.extend(self._values_of(node.body, index))
            else:
                self.visit(stmt)

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        func = self._func_of(node)
        if func:
            self.funcs.append(func)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self.visit_FunctionDef(node)

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        if not self._visible(node.name):
            return

        type_ = Type(
            name=node.name,
            signature=_signature_of_class(node),
            location=self._location(node),
            doc=ast.get_docstring(node) or '',
            bases=[ast.unparse(b) for b in node.bases],
        )

        for index, item in enumerate(node.body):
            if isinstance(item, (ast.FunctionDef, ast.AsyncFunctionDef)):
                method = self._func_of(item, receiver=node.name)
                if method:
                    type_.methods.append(method)
            elif isinstance(item, (ast.Assign, ast.AnnAssign)):
                type_.attributes.extend(self._values_of(node.body, index))

        self.types.append(type_)

    def _func_of(self, node: FunctionNode, receiver: Optional[str] = None) -> Optional[Func]:
        if not self._visible(node.name, member=receiver is not None):
            return None
        return Func(
            name=node.name,
            signature=_signature_of_function(node),
            location=self._location(node),
            doc=ast.get_docstring(node) or '',
            receiver=receiver,
        )

    def _value_visible(self, name: str) -> bool:
        if name.startswith('__') and name.endswith('__'):
            return False
        return self.include_unexported or not name.startswith('_')

    def _values_of(self, body: List[ast.stmt], index: int) -> List[Value]:
        node = body[index]
        names = [n for n in _assigned_names(node) if self._value_visible(n)]
        if not names:
            return []

        doc = _following_docstring(body, index)
        signature = ast.unparse(node)
        return [
            Value(name=name, signature=signature, location=self._location(node), doc=doc)
            for name in names
        ]
