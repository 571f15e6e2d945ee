import pandas as pd
import pytest
from ctrue_tools.trigger_classifier.exceptions import ConfigurationError, RunNotFoundError
from ctrue_tools.trigger_classifier.runs import GOOD_RUNS, GoodRunTable
from ctrue_tools.trigger_classifier.types import RunRecord


class TestPresets:
    @pytest.mark.parametrize("period", list(GOOD_RUNS))
    def test_preset_builds(self, period):
        table = GoodRunTable.from_preset(period)
        assert len(table) == len(GOOD_RUNS[period])
        assert table.period == period

    def test_unknown_preset(self):
        with pytest.raises(ConfigurationError):
            GoodRunTable.from_preset("pp2017")

    def test_presets_do_not_share_runs(self):
        a = set(GoodRunTable.from_preset("pbpb2018"))
        b = set(GoodRunTable.from_preset("pbpb2015"))
        assert not a & b


class TestLookup:
    def test_known_run(self):
        table = GoodRunTable.from_preset("xexe2017")
        rec = table.lookup(280234)
        assert rec == RunRecord(280234, 1.16, 0.0047)
        assert table[280234] is rec

    def test_unknown_run_lookup_is_none(self):
        table = GoodRunTable.from_preset("xexe2017")
        assert table.lookup(1) is None
        assert 1 not in table

    def test_unknown_run_getitem_raises(self):
        table = GoodRunTable.from_preset("xexe2017")
        with pytest.raises(RunNotFoundError) as exc:
            table[1]
        assert exc.value.run_id == 1
        assert isinstance(exc.value, KeyError)

    def test_iterates_in_run_order(self):
        table = GoodRunTable([(3, 1.0, 0.1), (1, 1.0, 0.2)])
        assert list(table) == [1, 3]
        assert [r.run_id for r in table.records()] == [1, 3]


class TestValidation:
    def test_duplicate_run(self):
        with pytest.raises(ConfigurationError):
            GoodRunTable([(1, 1.0, 0.1), (1, 2.0, 0.2)])

    @pytest.mark.parametrize("weight", [0.0, -1.0, float("nan")])
    def test_bad_weight(self, weight):
        with pytest.raises(ConfigurationError):
            GoodRunTable([(1, weight, 0.1)])

    def test_negative_mu(self):
        with pytest.raises(ConfigurationError):
            GoodRunTable([(1, 1.0, -0.1)])

    def test_zero_mu_allowed(self):
        assert GoodRunTable([(1, 1.0, 0.0)]).lookup(1).mu == 0.0


class TestFromFrame:
    def test_from_frame(self):
        df = pd.DataFrame({"run": [10, 11], "weight": [1.0, 2.0], "mu": [0.5, 1.0]})
        table = GoodRunTable.from_frame(df, period="custom")
        assert table[11] == RunRecord(11, 2.0, 1.0)

    def test_missing_column(self):
        df = pd.DataFrame({"run": [10], "weight": [1.0]})
        with pytest.raises(ConfigurationError):
            GoodRunTable.from_frame(df)

    def test_from_csv(self, tmp_path):
        path = tmp_path / "runs.csv"
        path.write_text("run,weight,mu\n1,1.0,1.0\n2,2.0,1.5\n")
        table = GoodRunTable.from_csv(path)
        assert len(table) == 2
        assert table.lookup(2).weight == 2.0

    def test_table_is_read_only(self):
        table = GoodRunTable([(1, 1.0, 0.1)])
        with pytest.raises(TypeError):
            table._runs[2] = RunRecord(2, 1.0, 0.1)


class TestFromRecords:
    def test_accepts_run_records_and_triples(self):
        table = GoodRunTable.from_records([RunRecord(5, 1.5, 0.3), (6, 0.5, 0.4)], period="x")
        assert table[5].weight == 1.5
        assert table[6] == RunRecord(6, 0.5, 0.4)
        assert table.period == "x"
