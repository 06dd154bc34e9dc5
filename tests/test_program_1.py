from pathlib import Path

from basicsharp.interpreter import Interpreter
from basicsharp.parser import parse_program

EXAMPLES = Path(__file__).parent.parent / 'examples'


def test_program_1(capsys):
    source = (EXAMPLES / 'program_1.bas').read_text(encoding='utf-8')
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!'
