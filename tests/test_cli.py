import numpy as np
import pandas as pd
import pytest
from psrf import cli


@pytest.fixture
def draws_file(tmp_path):
    rng = np.random.default_rng(5)
    n = 200
    wide = pd.DataFrame({
        "Chain": np.repeat([1, 2, 3], n),
        "mu": rng.normal(size=3 * n),
        "beta[1]": np.concatenate([rng.normal(loc=k * 4, size=n) for k in range(3)]),
        "beta[2]": rng.normal(size=3 * n),
    })
    path = tmp_path / "draws.csv"
    wide.to_csv(path, index=False)
    return path


def test_main(draws_file, tmp_path):
    out = tmp_path / "out"
    assert cli.main([str(draws_file), "-o", str(out), "-q"]) == 0
    result = pd.read_csv(out / "rhat.csv")
    assert sorted(result["Parameter"]) == ["beta[1]", "beta[2]", "mu"]
    assert (out / "rhat.png").is_file()


def test_family_and_settings_file(draws_file, tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("family: 'beta'\ngreek: true\noutput_rhat: 'beta.csv'\noutput_plot: ''\n")
    argv = cli.parse_args([str(draws_file), "-s", str(settings), "-o", str(tmp_path), "--no-scaling"])
    cli.setup_logging(quiet = True)
    result = cli.run(argv)
    assert result["Parameter"].tolist() == ["beta[1]", "beta[2]"]
    assert (tmp_path / "beta.csv").is_file()
    assert not (tmp_path / "rhat.png").exists()
    assert result.set_index("Parameter").loc["beta[1]", "Rhat"] > 1.1


def test_single_chain_exit_status(tmp_path):
    path = tmp_path / "draws.csv"
    pd.DataFrame({"Chain": [1, 1, 1], "mu": [0.1, 0.2, 0.3]}).to_csv(path, index=False)
    assert cli.main([str(path), "-o", str(tmp_path), "-q"]) == 1


def test_missing_file(tmp_path):
    assert cli.main([str(tmp_path / "missing.csv"), "-q"]) == 1


def test_command_line_overrides():
    argv = cli.parse_args(["draws.csv", "--scaling", "3", "--burnin", "50"])
    settings = cli.get_settings(argv)
    assert settings.scaling == 3.0
    assert settings.burnin == 50
    assert settings.thin == 1


def test_non_numeric_column_exit_status(tmp_path):
    path = tmp_path / "draws.csv"
    pd.DataFrame({"Chain": [1, 1, 2, 2], "mu": [0.1, 0.2, 0.3, 0.4],
                  "note": ["a", "b", "c", "d"]}).to_csv(path, index=False)
    assert cli.main([str(path), "-o", str(tmp_path), "-q"]) == 1
