#!/usr/bin/env python
# Created by "Thieu" at 16:05, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

from typing import TypeVar
import pickle
import numpy as np
import pandas as pd
from pathlib import Path
from sklearn.base import BaseEstimator
from permetrics import RegressionMetric
from xfis.helpers.metric_util import get_all_regression_metrics
from xfis.helpers.errors import InvalidArgumentError


# Create a TypeVar for the base class
EstimatorType = TypeVar('EstimatorType', bound='BaseAnfis')


class BaseAnfis(BaseEstimator):
    """
    Scikit-learn style base class for estimators built on the hybrid-learning `Anfis` system.

    It keeps the trained system and its loss history, and provides metric evaluation through
    Permetrics together with helpers to save the loss, the metrics, the predictions and the model itself.

    Parameters
    ----------
    radii : float or array-like
        Subtractive clustering radius, a scalar or one value per feature plus one for the target.
    squash_factor : float
    accept_ratio : float
    reject_ratio : float
        Subtractive clustering settings.
    epochs : int
        Number of training epochs.
    nu : float
        Initial learning rate of the premise parameters.
    nu_step : float
        Multiplicative decay of the learning rate after every epoch.
    error : float
        Target training error, kept for reference only.
    verbose : bool
        Print the training progress.

    Attributes
    ----------
    network : Anfis or None
        The trained fuzzy system, None until `fit` is called.
    loss_train : list or None
        Training error of every epoch.
    SUPPORTED_REG_METRICS : dict
        Regression metrics available in `evaluate`.
    """

    SUPPORTED_REG_METRICS = get_all_regression_metrics()

    def __init__(self, radii=0.5, squash_factor=1.25, accept_ratio=0.5, reject_ratio=0.15,
                 epochs=10, nu=0.1, nu_step=0.9, error=0.0, verbose=True):
        self.radii = radii
        self.squash_factor = squash_factor
        self.accept_ratio = accept_ratio
        self.reject_ratio = reject_ratio
        self.epochs = epochs
        self.nu = nu
        self.nu_step = nu_step
        self.error = error
        self.verbose = verbose
        self.network = None
        self.loss_train = None

    def fit(self, X, y):
        pass

    def predict(self, X):
        pass

    def score(self, X, y):
        pass

    def __evaluate_reg(self, y_true, y_pred, list_metrics=("MSE", "MAE")):
        """
        Evaluate regression performance metrics.

        Parameters
        ----------
        y_true : array-like
            True target values.
        y_pred : array-like
            Predicted values.
        list_metrics : tuple of str, list of str
            List of metrics for evaluation (e.g., "MSE" and "MAE").

        Returns
        -------
        dict
            Dictionary of calculated metric values.
        """
        rm = RegressionMetric(y_true=y_true, y_pred=y_pred)
        return rm.get_metrics_by_list_names(list_metrics)

    def evaluate(self, y_true, y_pred, list_metrics=None):
        pass

    def save_training_loss(self, save_path="history", filename="loss.csv"):
        """
        Save the training history to a CSV file with the columns ``epoch``, ``loss`` and ``nu``.

        ``nu`` is the learning rate of the premise parameters used in that epoch. When training was
        halted, the file holds the epochs completed before the halt.

        Parameters
        ----------
        save_path : str, optional
            Path to save the file (default: "history").
        filename : str, optional
            Filename for saving loss history (default: "loss.csv").
        """
        Path(save_path).mkdir(parents=True, exist_ok=True)
        if self.loss_train is None:
            print(f"{self.__class__.__name__} model doesn't have training loss!")
            return
        if self.network is not None and self.network.halted:
            print(f"{self.__class__.__name__} training was halted after {len(self.loss_train)} epoch(s).")
        epochs = np.arange(1, len(self.loss_train) + 1)
        data = {"epoch": epochs, "loss": self.loss_train, "nu": self.nu * self.nu_step ** (epochs - 1)}
        pd.DataFrame(data).to_csv(f"{save_path}/{filename}", index=False)

    def save_evaluation_metrics(self, y_true, y_pred, list_metrics=("RMSE", "MAE"), save_path="history", filename="metrics.csv"):
        """
        Save evaluation metrics to a CSV file, one column per metric.

        Parameters
        ----------
        y_true : array-like
            Ground truth values.
        y_pred : array-like
            Model predictions.
        list_metrics : list of str, optional
            Metrics for evaluation (default: ("RMSE", "MAE")).
        save_path : str, optional
        filename : str, optional
        """
        Path(save_path).mkdir(parents=True, exist_ok=True)
        results = self.evaluate(y_true, y_pred, list_metrics)
        df = pd.DataFrame.from_dict(results, orient='index').T
        df.to_csv(f"{save_path}/{filename}", index=False)

    def save_y_predicted(self, X, y_true, save_path="history", filename="y_predicted.csv"):
        """Save true and predicted values to a CSV file with the columns ``y_true``, ``y_pred`` and ``residual``."""
        Path(save_path).mkdir(parents=True, exist_ok=True)
        y_pred = self.predict(X)
        y_true = np.squeeze(np.asarray(y_true, dtype=float))
        y_pred = np.squeeze(np.asarray(y_pred, dtype=float))
        data = {"y_true": y_true, "y_pred": y_pred, "residual": y_true - y_pred}
        pd.DataFrame(data).to_csv(f"{save_path}/{filename}", index=False)

    def save_model(self, save_path="history", filename="model.pkl"):
        """
        Save the estimator, trained system included, to a pickle file.

        Parameters
        ----------
        save_path : str, optional
            Path to save the model (default: "history").
        filename : str, optional
            Filename, the ".pkl" extension is appended when missing (default: "model.pkl").
        """
        Path(save_path).mkdir(parents=True, exist_ok=True)
        if filename[-4:] != ".pkl":
            filename += ".pkl"
        with open(f"{save_path}/{filename}", 'wb') as f:
            pickle.dump(self, f)

    @staticmethod
    def load_model(load_path="history", filename="model.pkl") -> EstimatorType:
        """
        Load a model from a pickle file.

        Parameters
        ----------
        load_path : str, optional
            Path to load the model from (default: "history").
        filename : str, optional
            Filename of the saved model (default: "model.pkl").

        Returns
        -------
        BaseAnfis
            The loaded model.

        Raises
        ------
        InvalidArgumentError
            If the file does not hold an estimator of this package.
        """
        if filename[-4:] != ".pkl":
            filename += ".pkl"
        with open(f"{load_path}/{filename}", "rb") as f:
            model = pickle.load(f)
        if not isinstance(model, BaseAnfis):
            raise InvalidArgumentError(f"{load_path}/{filename} does not hold an ANFIS estimator.")
        return model
