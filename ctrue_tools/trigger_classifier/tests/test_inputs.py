import numpy as np
import pytest
from ctrue_tools.trigger_classifier.config import L0, L1, PERIODS, TRIGGER_INPUTS
from ctrue_tools.trigger_classifier.exceptions import ConfigurationError
from ctrue_tools.trigger_classifier.inputs import TriggerInputSet


INPUTS = TriggerInputSet.from_preset("pbpb2018")


class TestDecode:
    def test_zero_words_fire_nothing(self):
        flags = INPUTS.decode(0, 0)
        assert len(flags) == 10
        assert flags.names_fired() == ()

    def test_single_bit(self):
        flags = INPUTS.decode(1 << 6, 0)
        assert flags["0SH1"] is True
        assert flags.names_fired() == ("0SH1",)

    def test_l1_word(self):
        flags = INPUTS.decode(0, 1 << 14)
        assert flags["1ZED"] is True
        assert flags["0VBA"] is False

    def test_unmapped_bits_are_ignored(self):
        flags = INPUTS.decode(1 << 31 | 1 << 2, 1 << 0)
        assert flags.names_fired() == ()

    def test_words_wider_than_32_bits_are_masked(self):
        flags = INPUTS.decode((1 << 40) | 1, 0)
        assert flags.names_fired() == ("0VBA",)

    @pytest.mark.parametrize("period", PERIODS)
    def test_decode_is_total(self, period):
        inputs = TriggerInputSet.from_preset(period)
        rng = np.random.default_rng(11)
        for _ in range(50):
            l0, l1 = (int(v) for v in rng.integers(0, 2 ** 32, size=2))
            flags = inputs.decode(l0, l1)
            assert set(flags) == set(inputs.names)
            assert all(isinstance(flags[n], bool) for n in flags)

    def test_decode_is_repeatable(self):
        assert INPUTS.decode(0x5A5A, 0x4000) == INPUTS.decode(0x5A5A, 0x4000)


class TestEncode:
    def test_encode_then_decode_fires_named_inputs(self):
        l0, l1 = INPUTS.encode("0VBA", "0UBC", "1ZED")
        assert INPUTS.decode(l0, l1).names_fired() == ("0VBA", "0UBC", "1ZED")

    def test_encode_unknown_name_raises(self):
        with pytest.raises(ConfigurationError):
            INPUTS.encode("0XYZ")

    def test_presets_use_different_bits(self):
        l0_2018, _ = TriggerInputSet.from_preset("pbpb2018").encode("0UBA")
        l0_2015, _ = TriggerInputSet.from_preset("pbpb2015").encode("0UBA")
        assert l0_2018 != l0_2015


class TestDefinitions:
    def test_all_presets_define_the_same_inputs(self):
        names = {frozenset(d[0] for d in defs) for defs in TRIGGER_INPUTS.values()}
        assert len(names) == 1

    def test_duplicate_name_rejected(self):
        with pytest.raises(ConfigurationError):
            TriggerInputSet((("0VBA", L0, 0), ("0VBA", L0, 1)))

    def test_bit_out_of_range_rejected(self):
        with pytest.raises(ConfigurationError):
            TriggerInputSet((("0VBA", L0, 32),))

    def test_unknown_word_rejected(self):
        with pytest.raises(ConfigurationError):
            TriggerInputSet((("0VBA", "L2", 0),))

    def test_unknown_preset_rejected(self):
        with pytest.raises(ConfigurationError):
            TriggerInputSet.from_preset("pp2016")

    def test_custom_table(self):
        inputs = TriggerInputSet((("A", L0, 3), ("B", L1, 0)))
        flags = inputs.decode(0b1000, 1)
        assert flags["A"] and flags["B"]
