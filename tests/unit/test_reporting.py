import json

import numpy as np

from paintnet.core.network import Network
from paintnet.data.canvas import NO_COLOR, SAMPLE_COLOR, YES_COLOR
from paintnet.reporting.metrics import CsvSink, JsonlSink
from paintnet.reporting.plots import PlotAdapter
from paintnet.reporting.render import (
    blend,
    format_status,
    overlay_samples,
    render_field,
    side_by_side,
)
from paintnet.reporting.summary import first_below, loss_auc, write_summary


def test_render_field_matches_propagate():
    net = Network([2, 3, 1], seed=0)
    field = render_field(net, width=8, height=5)
    assert field.shape == (5, 8)
    assert np.all((field > 0.0) & (field < 1.0))
    assert np.isclose(field[2, 6], net.propagate([6 / 8, 2 / 5])[0])


def test_blend_endpoints_and_midpoint():
    rgb = blend(np.array([[1.0, 0.0, 0.5, 3.0, -1.0]]))
    assert rgb.dtype == np.uint8
    assert rgb[0, 0].tolist() == list(YES_COLOR)
    assert rgb[0, 1].tolist() == list(NO_COLOR)
    assert rgb[0, 2].tolist() == [197, 183, 129]
    assert rgb[0, 3].tolist() == list(YES_COLOR)
    assert rgb[0, 4].tolist() == list(NO_COLOR)


def test_overlay_and_side_by_side():
    base = np.zeros((10, 10, 3), dtype=np.uint8)
    dotted = overlay_samples(base, np.array([[5, 5]]), size=2)
    assert dotted[5, 5].tolist() == list(SAMPLE_COLOR)
    assert dotted[0, 0].tolist() == [0, 0, 0]
    assert base[5, 5].tolist() == [0, 0, 0]
    joined = side_by_side([base, dotted], gap=3)
    assert joined.shape == (10, 23, 3)
    assert joined[0, 11].tolist() == [255, 255, 255]


def test_format_status():
    assert format_status(12, 0.123456) == "Iteration 12 | Error: 12.35%"


def test_sinks_write_one_row_per_step(tmp_path):
    jsonl = JsonlSink(tmp_path / "m.jsonl", seed=3, sha="abc")
    csv_sink = CsvSink(tmp_path / "m.csv")
    for step, loss in enumerate([0.3, 0.2, 0.1], start=1):
        jsonl.on_step(step, {"loss": loss})
        csv_sink(step, {"loss": loss})
    records = [json.loads(line) for line in (tmp_path / "m.jsonl").read_text().splitlines()]
    assert [r["step"] for r in records] == [1, 2, 3]
    assert records[0] == {"step": 1, "seed": 3, "sha": "abc", "loss": 0.3}
    lines = (tmp_path / "m.csv").read_text().splitlines()
    assert lines[0] == "loss,step"
    assert len(lines) == 4


def test_summary_statistics(tmp_path):
    metrics = tmp_path / "metrics.jsonl"
    metrics.write_text(
        "\n".join(json.dumps({"step": i, "loss": v}) for i, v in enumerate([0.4, 0.2, 0.04, 0.01], 1))
    )
    path = write_summary(metrics, tmp_path / "summary.json", final_error=0.009, threshold=0.05)
    summary = json.loads(open(path).read())
    assert summary["iterations"] == 4
    assert summary["first_below_threshold"] == 3
    assert summary["loss"]["min"] == 0.01
    assert summary["loss"]["last"] == 0.01
    assert np.isclose(summary["final_error_percent"], 0.9)
    assert loss_auc([1.0, 1.0, 1.0]) == 2.0
    assert first_below([0.5], [1], 0.1) is None


def test_plot_adapter_headless(tmp_path):
    adapter = PlotAdapter(tmp_path, enable_plots=True)
    adapter.on_step(1, {"loss": 0.5})
    adapter.on_step(2, {"loss": 0.25})
    assert adapter.close() == str(tmp_path / "loss.png")
    assert (tmp_path / "loss.png").exists()
    assert PlotAdapter(tmp_path / "off").close() is None
