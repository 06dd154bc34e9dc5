import builtins
import math
import random
from pathlib import Path

from basicsharp.interpreter import Interpreter
from basicsharp.parser import parse_program

EXAMPLES = Path(__file__).parent.parent / 'examples'
SEED = 2024


def secret_number():
    return math.floor(random.Random(SEED).random() * (100 - 1) + 1)


def play(monkeypatch, guesses):
    answers = iter(guesses)
    prompts = []

    def fake_input(prompt=''):
        prompts.append(prompt)
        return next(answers)

    monkeypatch.setattr(builtins, 'input', fake_input)
    source = (EXAMPLES / 'program_4.bas').read_text(encoding='utf-8')
    interp = Interpreter(seed=SEED)
    interp.run(parse_program(source))
    return interp, prompts


def test_program_4_guess_right(monkeypatch, capsys):
    target = secret_number()
    low = str(target - 1) if target > 1 else '0'
    interp, prompts = play(monkeypatch, [low, str(target)])
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['Nope, guess higher.', 'Good job!', 'Bye.']
    assert prompts == ['Guess a number from 1 to 100: '] * 2
    assert interp.env.values['tries'] == 2.0


def test_program_4_out_of_tries(monkeypatch, capsys):
    play(monkeypatch, ['1000'] * 5)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['Nope, guess lower.'] * 5 + ['Out of tries.', 'Bye.']
