"""日志模块测试"""
import pytest
from loguru import logger

from dicebox.logging import log_roll, setup_logging
from dicebox.services import Accepted, Rejected


@pytest.fixture
def captured():
    """把 loguru 输出收集到列表中"""
    messages = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


class FakeService:
    def __init__(self, outcome=None, error=None):
        self.outcome = outcome
        self.error = error

    @log_roll
    def handle_roll(self, expression):
        if self.error:
            raise self.error
        return self.outcome


class TestLogRoll:
    """测试 log_roll 装饰器"""

    def test_accepted(self, captured):
        """测试接受时记录 ROLL_OK"""
        outcome = FakeService(Accepted("1d1 = [1] = 1\nTotal: 1", 1)).handle_roll("1d1")
        assert outcome.accepted
        assert captured[0] == "ROLL | expr='1d1'"
        assert captured[1].startswith("ROLL_OK | expr='1d1'")

    def test_rejected(self, captured):
        """测试拒绝时记录原因"""
        FakeService(Rejected("骰点表达式为空")).handle_roll("")
        assert captured[1].startswith("ROLL_REJECT | expr='' | reason=骰点表达式为空")

    def test_error_reraised(self, captured):
        """测试异常被记录后重新抛出"""
        with pytest.raises(RuntimeError):
            FakeService(error=RuntimeError("boom")).handle_roll("1d6")
        assert any(m.startswith("ROLL_ERR") and "RuntimeError: boom" in m for m in captured)


class TestSetupLogging:
    """测试 setup_logging"""

    def test_creates_log_files(self, tmp_path, monkeypatch):
        """测试文件输出"""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        setup_logging(level="INFO", log_path=tmp_path / "logs", enable_console=False)
        try:
            logger.error("写入错误日志")
            logger.complete()
            names = sorted(p.name for p in (tmp_path / "logs").iterdir())
            assert any(name.startswith("dicebox_") for name in names)
            assert any(name.startswith("error_") for name in names)
        finally:
            logger.remove()
