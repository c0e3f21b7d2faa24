"""
Tests for the command-line interface.
"""
from click.testing import CliRunner

from expr_evolution.cli import cli


class TestCli:

    def test_generate(self):
        runner = CliRunner()
        result = runner.invoke(cli, ['generate', '-n', '4', '--max-depth', '2', '--seed', '1'])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 4

    def test_generate_invalid_range(self):
        runner = CliRunner()
        result = runner.invoke(cli, ['generate', '--min-depth', '3', '--max-depth', '1'])
        assert result.exit_code == 2

    def test_evolve_target_value(self):
        runner = CliRunner()
        result = runner.invoke(cli, [
            'evolve', '--target-value', '8', '--population', '500', '--elite', '20',
            '--min-depth', '1', '--max-depth', '2', '--mutation-depth', '2',
            '--generations', '40', '--seed', '3'
        ])
        assert result.exit_code == 0, result.output
        assert "converged" in result.output
        assert "Target value: 8.0" in result.output

    def test_evolve_generation_cap_exits_nonzero(self):
        runner = CliRunner()
        result = runner.invoke(cli, [
            'evolve', '--target', 'cubic', '--population', '30', '--elite', '5',
            '--generations', '2', '--seed', '1'
        ])
        assert result.exit_code == 1
        assert "generation_limit" in result.output

    def test_evolve_rejects_bad_config(self):
        runner = CliRunner()
        result = runner.invoke(cli, ['evolve', '--population', '10', '--elite', '20'])
        assert result.exit_code == 2
        assert "elite_count" in result.output
