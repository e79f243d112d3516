"""骰点服务单元测试"""
import pytest

from dicebox.config import Settings
from dicebox.dice import (
    DiceParser,
    DiceRoller,
    ResourceLimitError,
    RollLimits,
    SortMode,
    check_limits,
)
from dicebox.services import Accepted, Rejected, RollService


@pytest.fixture
def make_service(scripted):
    def factory(values=(), **limits):
        return RollService(
            roller=DiceRoller(rng=scripted(values)),
            limits=RollLimits(**limits),
        )
    return factory


class TestHandleRoll:
    """测试 handle_roll"""

    def test_accepted(self, make_service):
        """测试有效表达式"""
        outcome = make_service([4, 5]).handle_roll("2d6 +3")
        assert outcome == Accepted(display_text="2d6 +3 = [4, 5] = 12\nTotal: 12", final_value=12)
        assert outcome.accepted

    @pytest.mark.parametrize("expression", ["", "abc", "3d", "0d6", "3d6 @2", "0x 1d6"])
    def test_rejected(self, make_service, expression):
        """测试无效表达式被拒绝并附带原因"""
        outcome = make_service().handle_roll(expression)
        assert isinstance(outcome, Rejected)
        assert not outcome.accepted
        assert outcome.reason

    def test_reason_mentions_position(self, make_service):
        """测试拒绝原因包含出错位置"""
        outcome = make_service().handle_roll("3d6 @2")
        assert "第 5 个字符" in outcome.reason

    def test_rejected_does_not_consume_randomness(self, scripted):
        """测试被拒绝的表达式不会掷骰"""
        rng = scripted([])
        service = RollService(roller=DiceRoller(rng=rng))
        service.handle_roll("999999999d999999999")
        assert rng.calls == []


class TestLimits:
    """测试资源限制"""

    def test_adversarial_expression_rejected(self, make_service):
        """测试超大表达式被拒绝"""
        outcome = make_service().handle_roll("999999999d999999999")
        assert isinstance(outcome, Rejected)

    def test_total_dice_counts_repeats(self, make_service):
        """测试骰子总数包含重复次数"""
        assert isinstance(make_service([1] * 10, max_total_dice=10).handle_roll("2x 5d6"), Accepted)
        assert isinstance(make_service(max_total_dice=10).handle_roll("3x 2d6 2d4"), Rejected)

    def test_max_sides(self):
        """测试面数上限"""
        with pytest.raises(ResourceLimitError, match="面数"):
            check_limits(DiceParser.parse("1d101"), max_sides=100)

    def test_max_repeat(self):
        """测试重复次数上限"""
        with pytest.raises(ResourceLimitError, match="重复次数"):
            check_limits(DiceParser.parse("11x 1d6"), max_repeat=10)

    def test_within_limits(self):
        """测试未超限时不抛出"""
        RollLimits().check(DiceParser.parse("100x 100d1000000"))

    def test_chained_multipliers_rejected(self, make_service):
        """测试连续乘法导致结果过大时被拒绝"""
        outcome = make_service().handle_roll("1d1" + " *999999999" * 5)
        assert isinstance(outcome, Rejected)
        assert "结果可能过大" in outcome.reason

    def test_max_result_counts_repeats(self):
        """测试结果上限包含重复次数和多段相加"""
        check_limits(DiceParser.parse("1d6 *10"), max_result=60)
        with pytest.raises(ResourceLimitError, match="结果可能过大"):
            check_limits(DiceParser.parse("2x 1d6 *10"), max_result=60)
        with pytest.raises(ResourceLimitError, match="结果可能过大"):
            check_limits(DiceParser.parse("1d6 *10 1d1"), max_result=60)

    def test_sort_resets_result_bound(self):
        """测试 sN 重新按骰面计算上界，但之前的中间值仍受限制"""
        check_limits(DiceParser.parse("2d6 *5 s1 +1"), max_result=60)
        with pytest.raises(ResourceLimitError):
            check_limits(DiceParser.parse("2d6 *5 +1 s1"), max_result=60)


class TestFromSettings:
    """测试按配置创建服务"""

    def test_settings_applied(self):
        """测试配置项传递到执行器和限制"""
        settings = Settings(
            max_total_dice=50, max_sides=20, max_repeat=3, max_result=1000,
            sort_mode="drop_lowest", rng_seed=7,
        )
        service = RollService.from_settings(settings)
        assert service.roller.sort_mode is SortMode.DROP_LOWEST
        assert service.limits == RollLimits(
            max_total_dice=50, max_sides=20, max_repeat=3, max_result=1000
        )

    def test_seed_is_reproducible(self):
        """测试固定种子可复现"""
        settings = Settings(rng_seed=99)
        first = RollService.from_settings(settings).handle_roll("4x 3d20 s2")
        second = RollService.from_settings(settings).handle_roll("4x 3d20 s2")
        assert first == second
