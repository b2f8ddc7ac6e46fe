from solver import solver_cli


def test_simulated_game_against_given_answer(capsys):
    assert solver_cli.main(["--answer", "FEDC", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "Solved! The code is FEDC" in out


def test_random_game_on_small_board(capsys):
    assert solver_cli.main(["--colors", "3", "--spaces", "2", "--random", "--seed", "1"]) == 0
    assert "Solved!" in capsys.readouterr().out


def test_interactive_game(monkeypatch, capsys):
    answer = (2, 0, 1)
    from mastermind.feedback import compute_score
    from mastermind.render import parse_combination

    def fake_input(prompt):
        out = capsys.readouterr().out
        shown = [line for line in out.splitlines() if line.startswith("Guess:")][-1]
        guess = parse_combination(shown.split("(")[-1].rstrip(")"), 3, 3)
        score = compute_score(guess, answer)
        return f"{score.white} {score.black}"

    monkeypatch.setattr("builtins.input", fake_input)
    assert solver_cli.main(["--colors", "3", "--spaces", "3", "--no-color"]) == 0


def test_contradictory_input_is_reported(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "0 0")
    assert solver_cli.main(["--colors", "2", "--spaces", "2", "--first", "AA", "--no-color"]) == 2
    assert "No combination fits" in capsys.readouterr().out


def test_quit(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "quit")
    assert solver_cli.main([]) == 0
    assert "bye!" in capsys.readouterr().out
