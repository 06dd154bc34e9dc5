"""Conversion between BasicSharp AST nodes and JSON-compatible objects.

Every node becomes a dict with a "type" key naming the node class and a
"position" key holding `[line, column]`. Literal values are stored as JSON
numbers, strings or booleans; operators are stored by their source
spelling.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    BinaryOperator, UnaryOperator, Node,
    UnaryOp, BinaryOp, Grouping, Literal, VarRef,
    PrintStmt, InputStmt, LetStmt, ToNumStmt, ToStrStmt, RndStmt,
    Block, IfStmt, WhileStmt, BreakStmt, ContinueStmt,
)
from .tokens import Position


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]
    if not isinstance(node, Node):
        raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")

    obj: Dict[str, Any] = {
        "type": type(node).__name__,
        "position": [node.position.line, node.position.column],
    }
    if isinstance(node, UnaryOp):
        obj.update(op=node.op.value, operand=ast_to_obj(node.operand))
    elif isinstance(node, BinaryOp):
        obj.update(op=node.op.value, left=ast_to_obj(node.left), right=ast_to_obj(node.right))
    elif isinstance(node, Grouping):
        obj.update(inner=ast_to_obj(node.inner))
    elif isinstance(node, Literal):
        obj.update(value=node.value)
    elif isinstance(node, VarRef):
        obj.update(name=node.name)
    elif isinstance(node, PrintStmt):
        obj.update(expr=ast_to_obj(node.expr))
    elif isinstance(node, InputStmt):
        obj.update(prompt=ast_to_obj(node.prompt), target=node.target)
    elif isinstance(node, LetStmt):
        obj.update(target=node.target, expr=ast_to_obj(node.expr))
    elif isinstance(node, (ToNumStmt, ToStrStmt)):
        obj.update(source=node.source, target=node.target)
    elif isinstance(node, RndStmt):
        obj.update(target=node.target, lower=ast_to_obj(node.lower), upper=ast_to_obj(node.upper))
    elif isinstance(node, Block):
        obj.update(statements=[ast_to_obj(s) for s in node.statements])
    elif isinstance(node, IfStmt):
        obj.update(
            condition=ast_to_obj(node.condition),
            then_branch=ast_to_obj(node.then_branch),
            else_branch=ast_to_obj(node.else_branch),
        )
    elif isinstance(node, WhileStmt):
        obj.update(condition=ast_to_obj(node.condition), body=ast_to_obj(node.body))
    elif not isinstance(node, (BreakStmt, ContinueStmt)):
        raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")
    return obj


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    line, column = obj["position"]
    pos = Position(line, column)
    if t == "UnaryOp":
        return UnaryOp(pos, UnaryOperator(obj["op"]), ast_from_obj(obj["operand"]))
    if t == "BinaryOp":
        return BinaryOp(pos, BinaryOperator(obj["op"]), ast_from_obj(obj["left"]), ast_from_obj(obj["right"]))
    if t == "Grouping":
        return Grouping(pos, ast_from_obj(obj["inner"]))
    if t == "Literal":
        value = obj["value"]
        # JSON does not keep 42.0 apart from 42
        if isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        return Literal(pos, value)
    if t == "VarRef":
        return VarRef(pos, obj["name"])
    if t == "PrintStmt":
        return PrintStmt(pos, ast_from_obj(obj["expr"]))
    if t == "InputStmt":
        return InputStmt(pos, ast_from_obj(obj["prompt"]), obj["target"])
    if t == "LetStmt":
        return LetStmt(pos, obj["target"], ast_from_obj(obj["expr"]))
    if t == "ToNumStmt":
        return ToNumStmt(pos, obj["source"], obj["target"])
    if t == "ToStrStmt":
        return ToStrStmt(pos, obj["source"], obj["target"])
    if t == "RndStmt":
        return RndStmt(pos, obj["target"], ast_from_obj(obj["lower"]), ast_from_obj(obj["upper"]))
    if t == "Block":
        return Block(pos, tuple(ast_from_obj(s) for s in obj["statements"]))
    if t == "IfStmt":
        return IfStmt(
            pos,
            ast_from_obj(obj["condition"]),
            ast_from_obj(obj["then_branch"]),
            ast_from_obj(obj.get("else_branch")),
        )
    if t == "WhileStmt":
        return WhileStmt(pos, ast_from_obj(obj["condition"]), ast_from_obj(obj["body"]))
    if t == "BreakStmt":
        return BreakStmt(pos)
    if t == "ContinueStmt":
        return ContinueStmt(pos)

    raise ValueError(f"Unknown AST node type: {t}")


def program_to_obj(statements: List[Any]) -> Dict[str, Any]:
    return {"type": "Program", "body": [ast_to_obj(s) for s in statements]}


def program_from_obj(obj: Dict[str, Any]) -> List[Any]:
    if not isinstance(obj, dict) or obj.get("type") != "Program":
        raise ValueError("Expected a Program object")
    return [ast_from_obj(s) for s in obj["body"]]
