from minishell.prompt import make_prompt


def test_prompt_shows_last_component():
    assert make_prompt("/home/user/project") == "\x1b[1;36mproject\x1b[0m "


def test_prompt_for_root():
    assert make_prompt("/") == "\x1b[1;36m\x1b[0m "


def test_prompt_defaults_to_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    prompt = make_prompt()
    assert prompt == make_prompt(str(tmp_path))
    assert tmp_path.name in prompt
    assert prompt.endswith(" ")