#!/usr/bin/env python
# Created by "Thieu" at 23:40, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import pickle
import numpy as np
import pandas as pd
import pytest
from sklearn.base import clone
from sklearn.exceptions import NotFittedError
from xfis import AnfisRegressor, Anfis, InvalidArgumentError


def test_fit_predict_score(grid_data):
    X, y = grid_data
    model = AnfisRegressor(radii=0.5, epochs=10, verbose=False)
    assert model.fit(X, y) is model
    assert isinstance(model.network, Anfis)
    assert model.size_input == 2

    y_pred = model.predict(X)
    assert isinstance(y_pred, np.ndarray)
    assert y_pred.shape == y.shape

    r2 = model.score(X, y)
    assert isinstance(r2, float)
    assert r2 > 0.99
    assert len(model.loss_train) == 10


def test_evaluate_metrics(grid_data):
    X, y = grid_data
    model = AnfisRegressor(radii=0.5, epochs=5, verbose=False).fit(X, y)
    y_pred = model.predict(X)

    metrics = model.evaluate(y, y_pred, list_metrics=["MSE", "MAE"])
    assert isinstance(metrics, dict)
    assert "MSE" in metrics and "MAE" in metrics
    assert metrics["MSE"] == pytest.approx(np.mean((y - y_pred) ** 2), abs=1e-6)
    assert set(model.evaluate(y, y_pred)) == {"MSE", "MAE"}
    with pytest.raises(InvalidArgumentError):
        model.evaluate(y, y_pred, list_metrics=["UNKNOWN"])


def test_predict_without_fit(grid_data):
    X, y = grid_data
    model = AnfisRegressor()
    with pytest.raises(NotFittedError):
        model.predict(X)
    with pytest.raises(AttributeError):
        model.score(X, y)


def test_get_params_and_clone():
    model = AnfisRegressor(radii=0.3, epochs=7, nu=0.05, verbose=False)
    params = model.get_params()
    assert params["radii"] == 0.3
    assert params["epochs"] == 7
    assert params["nu"] == 0.05
    cloned = clone(model)
    assert cloned.get_params() == params
    assert cloned.network is None


def test_save_and_load(grid_data, tmp_path):
    X, y = grid_data
    model = AnfisRegressor(radii=0.5, epochs=4, verbose=False).fit(X, y)
    save_path = str(tmp_path / "history")

    model.save_training_loss(save_path=save_path, filename="loss.csv")
    loss = pd.read_csv(f"{save_path}/loss.csv")
    assert list(loss.columns) == ["epoch", "loss", "nu"]
    assert len(loss) == 4
    assert np.allclose(loss["loss"].values, model.network.error_train)
    assert np.allclose(loss["nu"].values, [0.1, 0.09, 0.081, 0.0729])

    y_pred = model.predict(X)
    model.save_evaluation_metrics(y, y_pred, list_metrics=("RMSE", "MAE"), save_path=save_path)
    metrics = pd.read_csv(f"{save_path}/metrics.csv")
    assert list(metrics.columns) == ["RMSE", "MAE"]

    model.save_y_predicted(X, y, save_path=save_path)
    predicted = pd.read_csv(f"{save_path}/y_predicted.csv")
    assert np.allclose(predicted["y_pred"].values, y_pred)
    assert np.allclose(predicted["residual"].values, y - y_pred)

    model.save_model(save_path=save_path, filename="anfis")
    loaded = AnfisRegressor.load_model(load_path=save_path, filename="anfis")
    assert np.allclose(loaded.predict(X), y_pred)


def test_save_training_loss_without_fit(tmp_path, capsys):
    AnfisRegressor().save_training_loss(save_path=str(tmp_path))
    assert "AnfisRegressor model doesn't have training loss!" in capsys.readouterr().out


def test_load_model_rejects_foreign_pickle(tmp_path):
    with open(tmp_path / "other.pkl", "wb") as f:
        pickle.dump({"weights": [1, 2, 3]}, f)
    with pytest.raises(InvalidArgumentError):
        AnfisRegressor.load_model(load_path=str(tmp_path), filename="other")


def test_save_training_loss_after_halt(tmp_path, capsys):
    x = np.concatenate([np.linspace(0.0, 0.01, 30), [0.5], np.linspace(0.99, 1.0, 30)])
    model = AnfisRegressor(radii=0.02, epochs=5, verbose=False).fit(x.reshape(-1, 1), x)
    assert model.network.halted
    model.save_training_loss(save_path=str(tmp_path))
    assert "AnfisRegressor training was halted after 0 epoch(s)." in capsys.readouterr().out
    loss = pd.read_csv(tmp_path / "loss.csv")
    assert list(loss.columns) == ["epoch", "loss", "nu"]
    assert len(loss) == 0
