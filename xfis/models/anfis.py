#!/usr/bin/env python
# Created by "Thieu" at 14:20, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numpy as np
from xfis.core.matrix import Matrix
from xfis.core.clustering import SubtractiveClustering, check_radii
from xfis.core.variables import FuzzyVariable, SugenoVariable, LinearSugenoFunction
from xfis.core.rules import SugenoFuzzyRule
from xfis.core.rule_parser import RuleParser
from xfis.core import inference as inf
from xfis.helpers import validator
from xfis.helpers.membership_family import GaussianMembership
from xfis.helpers.errors import InvalidArgumentError, StructuralError, NumericDegeneracyError
from xfis.models.sugeno_fis import SugenoFuzzySystem

NAME_INPUT = "input"
NAME_OUTPUT = "output1"
NAME_MF = "mf"


class TrainingSession:
    """
    Working state of one `Anfis.train` run.

    The trainer builds and tunes its own variables and rules here; they are published to the model
    only once training is over.
    """

    def __init__(self, inputs, output, rules, rules_text, nu):
        self.inputs = inputs
        self.output = output
        self.rules = rules
        self.rules_text = rules_text
        self.nu = nu
        self.coefficients = np.zeros((len(inputs) + 1) * len(rules))
        self.error_train = []
        self.halted = False


class Anfis(SugenoFuzzySystem):
    """
    Adaptive Neuro-Fuzzy Inference System trained with the hybrid learning rule.

    The rule base is generated by subtractive clustering of the joint input/output samples: every cluster
    gives one Gaussian term per input (``mf1``, ``mf2``...), one linear consequent ``y = c0 + c1*x1 + ...``
    and one rule ``if (input1 is mfj) and ... then (output1 is mfj)``. Each epoch then

      - fits all consequent coefficients at once by least squares, using the SVD pseudo-inverse of the
        regressor matrix whose rows are ``normalized_weight_j * [1, x1, ..., xn]`` concatenated over the rules,
      - moves the center ``b`` and spread ``sigma`` of every Gaussian premise term by gradient descent on
        the squared error, one sample at a time.

    Parameters
    ----------
    xin : array-like, shape (n_inputs, n_samples)
        Training inputs, one row per input variable.
    xout : array-like, shape (n_samples,)
        Training targets.
    radii : float or array-like, optional (default=0.5)
        Clustering radius, a scalar or one value per input plus one for the output, each in (0, 1].
    squash_factor : float, optional (default=1.25)
    accept_ratio : float, optional (default=0.5)
    reject_ratio : float, optional (default=0.15)
        Subtractive clustering settings, see `SubtractiveClustering`.
    epochs : int, optional (default=10)
        Number of training epochs, must be positive.
    error : float, optional (default=0.0)
        Target training error. It is kept for reference only: training always runs the configured number
        of epochs unless it halts on a numerical failure or is stopped by the caller.
    nu : float, optional (default=0.1)
        Initial learning rate of the premise parameters, in [0, 1].
    nu_step : float, optional (default=0.9)
        The learning rate is multiplied by ``nu_step`` after every epoch, in [0, 1].
    verbose : bool, optional (default=False)
        Print the epoch losses and the clustering progress.

    Attributes
    ----------
    error_train : list of float
        Training error ``0.5 * sum((y_pred - y)^2)`` of every completed epoch of the last run.
    rules_text : list of str
        Text of the generated rules.
    halted : bool
        True when the last run stopped early because the least-squares solve was not finite.

    Examples
    --------
    >>> import numpy as np
    >>> from xfis import Anfis
    >>> grid = np.array([(a, b) for a in range(4) for b in range(4)], dtype=float)
    >>> model = Anfis(grid.T, grid.sum(axis=1), radii=0.5, epochs=10)
    >>> _ = model.train()
    >>> abs(model.calculate([2.0, 2.0]) - 4.0) < 0.5
    True
    """

    def __init__(self, xin, xout, radii=0.5, squash_factor=1.25, accept_ratio=0.5, reject_ratio=0.15,
                 epochs=10, error=0.0, nu=0.1, nu_step=0.9, verbose=False):
        super().__init__(and_method=inf.AndMethod.PRODUCTION, or_method=inf.OrMethod.MAX)
        xin = np.array(xin, dtype=float)
        xout = np.array(xout, dtype=float)
        if xin.ndim == 1:
            xin = xin.reshape(1, -1)
        if xin.ndim != 2 or xin.shape[0] < 1 or xin.shape[1] < 1:
            raise InvalidArgumentError(f"xin should be a 2-D array (n_inputs, n_samples), got shape {xin.shape}.")
        if xout.ndim != 1 or xout.size != xin.shape[1]:
            raise InvalidArgumentError(f"xout should hold one target per sample ({xin.shape[1]}), got shape {xout.shape}.")
        if not (np.all(np.isfinite(xin)) and np.all(np.isfinite(xout))):
            raise InvalidArgumentError("Training data should contain only finite values.")
        self.xin = xin
        self.xout = xout
        self.radii = radii
        self.squash_factor = validator.check_float("squash_factor", squash_factor, (0, float("inf")))
        self.accept_ratio = validator.check_float("accept_ratio", accept_ratio)
        self.reject_ratio = validator.check_float("reject_ratio", reject_ratio)
        self.epochs = epochs
        self.error = error
        self.nu = nu
        self.nu_step = nu_step
        self.verbose = validator.check_bool("verbose", verbose)
        self.error_train = []
        self.rules_text = []
        self.halted = False

    ## Configuration

    @property
    def epochs(self):
        return self._epochs

    @epochs.setter
    def epochs(self, value):
        self._epochs = validator.check_int("epochs", value, [1, float("inf")])

    @property
    def nu(self):
        return self._nu

    @nu.setter
    def nu(self, value):
        self._nu = validator.check_float("nu", value, [0., 1.])

    @property
    def nu_step(self):
        return self._nu_step

    @nu_step.setter
    def nu_step(self, value):
        self._nu_step = validator.check_float("nu_step", value, [0., 1.])

    @property
    def error(self):
        return self._error

    @error.setter
    def error(self, value):
        self._error = validator.check_float("error", value)

    @property
    def radii(self):
        return self._radii

    @radii.setter
    def radii(self, value):
        self._radii = check_radii(value)

    @property
    def n_inputs(self):
        return self.xin.shape[0]

    @property
    def n_samples(self):
        return self.xin.shape[1]

    ## Structure generation

    def _generate_fis(self):
        """Cluster the joint input/output samples and build the initial variables, consequents and rules."""
        data = np.vstack([self.xin, self.xout.reshape(1, -1)])
        clustering = SubtractiveClustering(self.radii, self.squash_factor, self.accept_ratio,
                                           self.reject_ratio, verbose=self.verbose)
        result = clustering.fit(data)
        if result.n_clusters == 0:
            raise StructuralError("Subtractive clustering found no cluster, no rule can be generated.")
        centers_in = result.centers[:-1]
        sigmas_in = result.sigmas[:-1]

        inputs = []
        for idx in range(self.n_inputs):
            var = FuzzyVariable(f"{NAME_INPUT}{idx + 1}", self.xin[idx].min(), self.xin[idx].max())
            for jdx in range(result.n_clusters):
                var.add_term(f"{NAME_MF}{jdx + 1}", GaussianMembership(centers_in[idx, jdx], sigmas_in[idx]))
            inputs.append(var)

        output = SugenoVariable(NAME_OUTPUT)
        for jdx in range(result.n_clusters):
            output.add_function(LinearSugenoFunction(f"{NAME_MF}{jdx + 1}", inputs, {var: 0.0 for var in inputs}, 0.0))

        rules_text = []
        for jdx in range(result.n_clusters):
            premise = " and ".join(f"({NAME_INPUT}{idx + 1} is {NAME_MF}{jdx + 1})" for idx in range(self.n_inputs))
            rules_text.append(f"if {premise} then ({NAME_OUTPUT} is {NAME_MF}{jdx + 1})")
        parser = RuleParser(inputs, [output])
        rules = [parser.parse(text, SugenoFuzzyRule()) for text in rules_text]
        return TrainingSession(inputs, output, rules, rules_text, self.nu)

    ## Training

    def _firing_strengths(self, session):
        """Raw firing strength of every rule for every sample, shape (n_samples, n_rules)."""
        strengths = np.zeros((self.n_samples, len(session.rules)))
        for gdx in range(self.n_samples):
            values = {var: self.xin[idx, gdx] for idx, var in enumerate(session.inputs)}
            fuzzified = inf.fuzzify_variables(session.inputs, values)
            for jdx, rule in enumerate(session.rules):
                strengths[gdx, jdx] = inf.evaluate_condition(rule.condition, fuzzified, self.and_method, self.or_method)
        return strengths

    def _update_premises(self, session, strengths, regressors, y_pred, coefficients):
        """
        One pass of gradient descent on the Gaussian premise parameters.

        For the term j of an input x (it belongs to rule j only), with normalized weight w_j / S,
        rule output f_j and network output y_pred:

            dE/db     = (y_pred - y) * (f_j - y_pred) * (w_j / S) * (x - b) / sigma^2
            dE/dsigma = (y_pred - y) * (f_j - y_pred) * (w_j / S) * (x - b)^2 / sigma^3

        Parameters move by ``2 * nu`` times these derivatives, sample by sample. A step giving a
        non-finite value is skipped.
        """
        n_coef = self.n_inputs + 1
        totals = strengths.sum(axis=1)
        for idx, var in enumerate(session.inputs):
            for jdx, term in enumerate(var.terms):
                mf = term.mf
                if not mf.supports_gradient_tuning:
                    continue
                block = coefficients[jdx * n_coef:(jdx + 1) * n_coef]
                for gdx in range(self.n_samples):
                    if totals[gdx] == 0 or mf.sigma == 0:
                        continue
                    xa = self.xin[idx, gdx] - mf.b
                    err = y_pred[gdx] - self.xout[gdx]
                    contribution = float(regressors[gdx] @ block) - y_pred[gdx]
                    share = strengths[gdx, jdx] / totals[gdx]
                    grad = 2 * session.nu * err * contribution * share
                    # Exact derivatives: divided by sigma^2 and sigma^3, not multiplied.
                    b = mf.b - grad * xa / (mf.sigma * mf.sigma)
                    sigma = mf.sigma - grad * xa * xa / (mf.sigma * mf.sigma * mf.sigma)
                    if np.isfinite(b) and np.isfinite(sigma):
                        mf.b, mf.sigma = float(b), float(sigma)

    def _halt(self, session, epoch, reason):
        session.halted = True
        print(f"Training halted at epoch {epoch}: {reason}")

    def train(self, callback=None, should_stop=None):
        """
        Generate the rule base and train it.

        Parameters
        ----------
        callback : callable, optional
            Called after every epoch as ``callback(epoch, epochs, nu, error)`` with the 1-based epoch,
            the configured number of epochs, the learning rate used in this epoch and the epoch error.
        should_stop : callable, optional
            Called before every epoch; training stops when it returns True.

        Returns
        -------
        self : Anfis
            The trained system. Its inputs, output and rules are replaced at the end of training.

        Raises
        ------
        StructuralError
            If clustering produces no rule.
        """
        validator.check_callable("callback", callback)
        validator.check_callable("should_stop", should_stop)
        session = self._generate_fis()
        n_rules = len(session.rules)
        if n_rules == 0:
            raise StructuralError("There should be at least one rule.")
        regressors = np.vstack([np.ones(self.n_samples), self.xin]).T
        Y = Matrix.column(self.xout)

        for epoch in range(1, self.epochs + 1):
            if should_stop is not None and should_stop():
                if self.verbose:
                    print(f"Training stopped by the caller before epoch {epoch}")
                break
            strengths = self._firing_strengths(session)
            with np.errstate(divide="ignore", invalid="ignore"):
                weights = strengths / strengths.sum(axis=1, keepdims=True)
            W = Matrix((weights[:, :, None] * regressors[:, None, :]).reshape(self.n_samples, -1))
            try:
                W_pinv = W.pinverse()
            except NumericDegeneracyError as e:
                self._halt(session, epoch, str(e))
                break
            if not W_pinv.is_finite():
                self._halt(session, epoch, "the pseudo-inverse of the regressor matrix is not finite.")
                break
            C = W_pinv * Y
            y_pred = (W * C).to_numpy().ravel()
            session.coefficients = C.to_numpy().ravel()

            self._update_premises(session, strengths, regressors, y_pred, session.coefficients)

            epoch_error = float(0.5 * np.sum((y_pred - self.xout) ** 2))
            session.error_train.append(epoch_error)
            if self.verbose:
                print(f"Epoch: {epoch}, Train Loss: {epoch_error:.4f}, Nu: {session.nu:.4f}")
            if callback is not None:
                callback(epoch, self.epochs, session.nu, epoch_error)
            session.nu *= self.nu_step

        self._finalize(session)
        return self

    def _finalize(self, session):
        """Write the coefficients into the consequents, rebuild the rules and publish the session."""
        n_coef = self.n_inputs + 1
        for jdx, func in enumerate(session.output.functions):
            block = session.coefficients[jdx * n_coef:(jdx + 1) * n_coef]
            func.set_coefficient(None, float(block[0]))
            for idx, var in enumerate(session.inputs):
                func.set_coefficient(var, float(block[idx + 1]))
        parser = RuleParser(session.inputs, [session.output])
        rules = [parser.parse(text, SugenoFuzzyRule()) for text in session.rules_text]

        self.inputs = session.inputs
        self.outputs = [session.output]
        self.rules = rules
        self.rules_text = list(session.rules_text)
        self.error_train = session.error_train
        self.halted = session.halted

    ## Inference

    def calculate(self, x):
        """
        Output of the trained system.

        Parameters
        ----------
        x : sequence of float or dict
            A vector with one value per input (in the order input1, input2...), or a mapping accepted by
            `SugenoFuzzySystem.calculate`.

        Returns
        -------
        float or dict
            The value of ``output1`` for a vector, the full ``{SugenoVariable: value}`` result for a mapping.
        """
        self._check_rules()
        if isinstance(x, dict):
            return super().calculate(x)
        x = np.asarray(x, dtype=float).ravel()
        if x.size != self.n_inputs:
            raise InvalidArgumentError(f"Expected {self.n_inputs} input values, got {x.size}.")
        values = {self.input_by_name(f"{NAME_INPUT}{idx + 1}"): x[idx] for idx in range(self.n_inputs)}
        return super().calculate(values)[self.output_by_name(NAME_OUTPUT)]
