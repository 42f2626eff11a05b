from click.testing import CliRunner


def test_version_attribute() -> None:
    import cenc_ctr

    assert isinstance(cenc_ctr.__version__, str)
    assert cenc_ctr.__version__


def test_cli_reports_version() -> None:
    from cenc_ctr import __version__
    from cenc_ctr.cli import cli

    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "cenc-ctr" in result.output
    assert __version__ in result.output

    command_result = runner.invoke(cli, ["version"])

    assert command_result.exit_code == 0
    assert "cenc-ctr" in command_result.output
    assert __version__ in command_result.output
