import json

import pytest

from basicsharp.ast import BinaryOperator, BinaryOp, Literal, PrintStmt
from basicsharp.ast_json import ast_from_obj, ast_to_obj, program_from_obj, program_to_obj
from basicsharp.parser import parse_program
from basicsharp.tokens import Position


SOURCE = (
    'let i = 0\n'
    'while not (i >= 3) do\n'
    '  let i = i + 1\n'
    '  if i == 2 then continue else print "i=" + i end\n'
    '  if i > 5 or false then break end\n'
    'end\n'
    'input "? ", s\n'
    'tonum s, n; tostr n\n'
    'rnd r, -1, 1\n'
)


def test_literal_object_shape():
    obj = ast_to_obj(PrintStmt(Position(1, 1), Literal(Position(1, 7), 42.0)))
    assert obj == {
        'type': 'PrintStmt',
        'position': [1, 1],
        'expr': {'type': 'Literal', 'position': [1, 7], 'value': 42.0},
    }


def test_operators_use_source_spelling():
    [stmt] = parse_program('print 1 <> 2 and true')
    obj = ast_to_obj(stmt)
    assert obj['expr']['op'] == 'and'
    assert obj['expr']['left']['op'] == '<>'


def test_program_survives_json_text():
    statements = parse_program(SOURCE)
    text = json.dumps(program_to_obj(statements))
    assert program_from_obj(json.loads(text)) == statements


def test_whole_numbers_come_back_as_floats():
    obj = {'type': 'Literal', 'position': [1, 1], 'value': 42}
    literal = ast_from_obj(obj)
    assert literal.value == 42.0
    assert isinstance(literal.value, float)
    assert ast_from_obj({'type': 'Literal', 'position': [1, 1], 'value': True}).value is True


def test_missing_else_is_null():
    [stmt] = parse_program('if true then print 1 end')
    obj = ast_to_obj(stmt)
    assert obj['else_branch'] is None
    assert ast_from_obj(obj) == stmt


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'GotoStmt', 'position': [1, 1]})


def test_not_a_program():
    with pytest.raises(ValueError):
        program_from_obj({'type': 'Block', 'body': []})


def test_unsupported_python_object():
    with pytest.raises(TypeError):
        ast_to_obj(BinaryOp(Position(1, 1), BinaryOperator.ADD, 1.0, 2.0))
