#!/usr/bin/env python
# Created by "Thieu" at 18:10, 03/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

import numpy as np
from sklearn.datasets import load_diabetes
from sklearn.model_selection import train_test_split
from sklearn.preprocessing import MinMaxScaler
from xfis import AnfisRegressor


## Load data
X, y = load_diabetes(return_X_y=True)
X = X[:, [2, 3, 8]]         # bmi, bp, s5

## Split train and test
X_train, X_test, y_train, y_test = train_test_split(X, y, test_size=0.2, random_state=2)
print(X_train.shape, X_test.shape)

## Scaling dataset
scaler_X = MinMaxScaler()
X_train = scaler_X.fit_transform(X_train)
X_test = scaler_X.transform(X_test)

scaler_y = MinMaxScaler()
y_train = scaler_y.fit_transform(y_train.reshape(-1, 1)).ravel()
y_test = scaler_y.transform(y_test.reshape(-1, 1)).ravel()

## Create model
model = AnfisRegressor(radii=0.5, squash_factor=1.25, accept_ratio=0.5, reject_ratio=0.15,
                       epochs=20, nu=0.1, nu_step=0.9, verbose=True)
## Train the model
model.fit(X_train, y_train)
print(f"Number of rules: {len(model.network.rules)}")
for rule in model.network.rules_text:
    print(rule)

## Test the model
y_pred = model.predict(X_test)

## Calculate some metrics
print(model.score(X_test, y_test))
print(model.evaluate(y_true=y_test, y_pred=y_pred, list_metrics=["R", "NSE", "MAPE", "KGE", "R2", "RMSE"]))

## Save results
model.save_training_loss(save_path="history", filename="loss.csv")
model.save_evaluation_metrics(y_true=y_test, y_pred=y_pred, list_metrics=("RMSE", "MAE"), save_path="history")
model.save_y_predicted(X=X_test, y_true=y_test, save_path="history")
model.save_model(save_path="history", filename="anfis.pkl")

new_model = AnfisRegressor.load_model(load_path="history", filename="anfis.pkl")
print(np.allclose(new_model.predict(X_test), y_pred))
