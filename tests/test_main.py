import pandas as pd

import config
import main


def test_main_generated_network(capsys):
    assert main.main(["-n", "8", "-k", "2", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "MIM Width:" in out
    assert "Rest MIM" in out


def test_main_reads_file_and_writes_outputs(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(config, "RESULT_PATH", str(tmp_path / "result"))
    net = tmp_path / "cycle.txt"
    net.write_text("1 2\n2 3\n3 4\n4 1\n")
    plot = tmp_path / "td.png"

    code = main.main(
        ["--file", str(net), "--seed", "0", "--reducing", "none", "--final", "first", "--output", "cycle", "--plot", str(plot)]
    )

    assert code == 0
    assert "MIM Width: 1" in capsys.readouterr().out
    assert plot.exists()
    frame = pd.read_csv(tmp_path / "result" / "cycle.csv")
    assert list(frame["Vertex"]) == [1, 3, 2]


def test_main_missing_file_reports_error(tmp_path):
    assert main.main(["--file", str(tmp_path / "missing.txt")]) == 1


def test_main_sweep(monkeypatch, capsys):
    monkeypatch.setattr(config, "NETWORK_NODES_LIST", [5, 6])
    monkeypatch.setattr(config, "NETWORK_AVERAGE_DEGREES", [1.0])
    assert main.main(["--sweep", "--net_type", "SF", "--seed", "2", "--repetitions", "2"]) == 0
    out = capsys.readouterr().out
    assert "MIM Width" in out
    assert "Average Degree" in out


def test_main_plots_single_vertex_network(tmp_path, capsys):
    net = tmp_path / "one.gr"
    net.write_text("p tw 1 0\n")
    plot = tmp_path / "one.png"
    assert main.main(["--file", str(net), "--plot", str(plot)]) == 0
    assert "MIM Width: 0" in capsys.readouterr().out
    assert plot.exists()


def test_main_truncated_header_reports_error(tmp_path):
    net = tmp_path / "bad.gr"
    net.write_text("p tw\n")
    assert main.main(["--file", str(net)]) == 1
