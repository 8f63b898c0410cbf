"""
命令行接口测试

使用 click 的 CliRunner 调用各个命令。
"""

from click.testing import CliRunner

from chess_game_project import __version__
from chess_game_project.main import cli


class TestCli:
    """命令行接口的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.runner = CliRunner()

    def test_version(self):
        """测试版本信息"""
        result = self.runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_info(self):
        """测试系统信息命令"""
        result = self.runner.invoke(cli, ['info'])
        assert result.exit_code == 0
        assert "Chess Game" in result.output
        assert "规则引擎" in result.output

    def test_moves(self):
        """测试列出初始局面合法走法"""
        result = self.runner.invoke(cli, ['moves'])
        assert result.exit_code == 0
        assert "共 20 种走法" in result.output
        assert "e2e4" in result.output

        result = self.runner.invoke(cli, ['moves', '--color', 'black'])
        assert result.exit_code == 0
        assert "e7e5" in result.output

    def test_play_human_vs_human(self):
        """测试双人对战输入走法"""
        result = self.runner.invoke(cli, ['play'], input="e2e4\ne7e5\nquit\n")
        assert result.exit_code == 0, result.output
        assert "1. e2-e4 e7-e5" in result.output
        assert "对局结束" in result.output

    def test_play_rejects_bad_input(self):
        """测试无效输入和非法走法"""
        result = self.runner.invoke(cli, ['play'], input="zz\ne2e5\nquit\n")
        assert result.exit_code == 0, result.output
        assert "输入无效" in result.output
        assert "非法走法" in result.output

    def test_play_shows_destinations(self):
        """测试输入格子名显示可走位置"""
        result = self.runner.invoke(cli, ['play'], input="g1\nquit\n")
        assert result.exit_code == 0, result.output
        assert "可走位置: f3, h3" in result.output

    def test_play_against_computer(self):
        """测试人机对战"""
        result = self.runner.invoke(
            cli,
            ['play', '--mode', 'human-vs-computer', '--seed', '1', '--delay', '0'],
            input="e2e4\nquit\n"
        )
        assert result.exit_code == 0, result.output
        assert "电脑走棋" in result.output

    def test_play_with_config_dir(self, tmp_path):
        """测试从配置目录读取配置"""
        config_dir = tmp_path / "configs"
        result = self.runner.invoke(
            cli,
            ['play', '--config', str(config_dir), '--mode', 'human-vs-computer',
             '--ai-color', 'white', '--delay', '0'],
            input="quit\n"
        )
        assert result.exit_code == 0, result.output
        assert (config_dir / "game_config.yaml").exists()
        assert "电脑走棋" in result.output
