#!/usr/bin/env python
# Created by "Thieu" at 16:40, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numpy as np
from sklearn.metrics import r2_score
from sklearn.base import RegressorMixin
from sklearn.exceptions import NotFittedError
from xfis.models.base_anfis import BaseAnfis
from xfis.models.anfis import Anfis
from xfis.helpers.metric_util import get_metric_names


class AnfisRegressor(BaseAnfis, RegressorMixin):
    """
    Adaptive Neuro-Fuzzy Inference System (ANFIS) Regressor trained with the hybrid learning rule.

    The rule base is generated by subtractive clustering of the training data, then every epoch solves
    the linear consequents by least squares (SVD pseudo-inverse) and tunes the Gaussian premises by
    gradient descent. See `xfis.models.anfis.Anfis` for the details.

    Parameters
    ----------
    radii : float or array-like, optional (default=0.5)
        Clustering radius, a scalar or one value per feature plus one for the target, each in (0, 1].
    squash_factor : float, optional (default=1.25)
    accept_ratio : float, optional (default=0.5)
    reject_ratio : float, optional (default=0.15)
        Subtractive clustering settings.
    epochs : int, optional (default=10)
        Number of training epochs.
    nu : float, optional (default=0.1)
        Initial learning rate of the premise parameters, in [0, 1].
    nu_step : float, optional (default=0.9)
        The learning rate is multiplied by this value after every epoch, in [0, 1].
    error : float, optional (default=0.0)
        Target training error, kept for reference only.
    verbose : bool, optional (default=True)
        Print the loss of every epoch.

    Attributes
    ----------
    network : Anfis
        The trained fuzzy system.
    loss_train : list of float
        Training error of every epoch.
    size_input : int
        Number of features seen in `fit`.

    Examples
    --------
    >>> import numpy as np
    >>> from xfis import AnfisRegressor
    >>> X = np.array([(a, b) for a in range(4) for b in range(4)], dtype=float)
    >>> y = X.sum(axis=1)
    >>> model = AnfisRegressor(radii=0.5, epochs=10, verbose=False).fit(X, y)
    >>> model.score(X, y) > 0.99
    True
    """

    def __init__(self, radii=0.5, squash_factor=1.25, accept_ratio=0.5, reject_ratio=0.15,
                 epochs=10, nu=0.1, nu_step=0.9, error=0.0, verbose=True):
        super().__init__(radii, squash_factor, accept_ratio, reject_ratio, epochs, nu, nu_step, error, verbose)

    def fit(self, X, y):
        """
        Fits the ANFIS model to the provided training data.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)
            Input features for training.
        y : array-like, shape (n_samples,)
            Target values for training.

        Returns
        -------
        self : AnfisRegressor
            Returns the instance of the fitted model.
        """
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        y = np.squeeze(np.asarray(y, dtype=float)).reshape(-1)
        self.size_input = X.shape[1]
        self.network = Anfis(X.T, y, radii=self.radii, squash_factor=self.squash_factor,
                             accept_ratio=self.accept_ratio, reject_ratio=self.reject_ratio,
                             epochs=self.epochs, error=self.error, nu=self.nu, nu_step=self.nu_step,
                             verbose=self.verbose)
        self.network.train()
        self.loss_train = list(self.network.error_train)
        return self

    def predict(self, X):
        """
        Predicts the target values for the given input features.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)
            Input features for prediction.

        Returns
        -------
        numpy.ndarray
            Predicted values, shape (n_samples,).
        """
        if self.network is None:
            raise NotFittedError(f"This {self.__class__.__name__} instance is not fitted yet. Call 'fit' first.")
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        return np.array([self.network.calculate(row) for row in X])

    def score(self, X, y):
        """
        Computes the R2 score of the predictions.

        Parameters
        ----------
        X : array-like
            Input features for scoring.
        y : array-like
            True target values for the input features.

        Returns
        -------
        float
            R2 score indicating the model's performance.
        """
        y_pred = self.predict(X)
        return r2_score(y, y_pred)

    def evaluate(self, y_true, y_pred, list_metrics=("MSE", "MAE")):
        """
        Returns a list of performance metrics for the predictions.

        Parameters
        ----------
        y_true : array-like of shape (n_samples,)
            True values for the input features.
        y_pred : array-like of shape (n_samples,)
            Predicted values for the input features.
        list_metrics : list, default=("MSE", "MAE")
            List of metrics to evaluate (can be from Permetrics library: https://github.com/thieu1995/permetrics).

        Returns
        -------
        results : dict
            A dictionary containing the results of the specified metrics.
        """
        list_metrics = get_metric_names(list_metrics)
        return self._BaseAnfis__evaluate_reg(y_true, y_pred, list_metrics)
