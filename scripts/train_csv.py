#!/usr/bin/env python3
"""
Train a KeyML regression/classification model on a CSV file.

The script loads the CSV, selects feature and target columns, splits the
rows into train/test sets, fits the chosen model and reports MSE, RMSE and
MAE on the test set together with the learned per-feature weights.

Example
-------
    python scripts/train_csv.py --csv data/titanic_clean.csv \
        --features Pclass Sex Age SibSp Parch Fare Embarked \
        --target Survived --model logistic
"""

import argparse
import os
import sys

# Ensure repo_root/src is importable when running this file directly:
# repo_root/
#   src/keyml/...
#   scripts/train_csv.py
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")

if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from keyml.infrastructure._csv_loader import (
    CSVLoader,
    dataset_from_columns,
    dataset_from_loader,
)
from keyml.infrastructure._metrics import (
    mean_absolute_error,
    mean_squared_error,
    root_mean_squared_error,
)
from keyml.infrastructure.models import LinearRegression, LogisticRegression


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Train a KeyML model on a CSV file and report test metrics."
    )
    parser.add_argument("--csv", required=True, help="Path of the CSV file.")
    parser.add_argument(
        "--features",
        nargs="*",
        default=None,
        help="Feature column names. Omit to use every non-target column "
        "(standardized).",
    )
    parser.add_argument(
        "--target",
        default=None,
        help="Target column name. Defaults to the last column.",
    )
    parser.add_argument("--model", choices=("linear", "logistic"), default="linear")
    parser.add_argument("--test-size", type=float, default=0.2)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--epochs", type=int, default=1000)
    parser.add_argument("--batch-size", type=int, default=32)
    parser.add_argument("--lr", type=float, default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    loader = CSVLoader(args.csv).load()
    columns = loader.column_names()

    print("Available columns:")
    for col in columns:
        print(f"- {col}")

    if args.features:
        target = args.target or columns[-1]
        feature_names = list(args.features)
        dataset = dataset_from_columns(loader, feature_names, target)
    else:
        target_idx = loader.column_index(args.target) if args.target else -1
        target_idx %= len(columns)
        feature_names = [c for i, c in enumerate(columns) if i != target_idx]
        dataset = dataset_from_loader(loader, target_idx)

    print(
        f"\nDataset: X {dataset.num_rows}x{dataset.num_features}, "
        f"y {dataset.num_rows}"
    )

    train, test = dataset.train_test_split(args.test_size, seed=args.seed)
    print(f"Train set: {train.num_rows} rows")
    print(f"Test set: {test.num_rows} rows")

    if args.model == "linear":
        model = LinearRegression(
            lr=args.lr if args.lr is not None else 0.001,
            epochs=args.epochs,
            batch_size=args.batch_size,
            verbose=args.verbose,
        )
    else:
        model = LogisticRegression(
            lr=args.lr if args.lr is not None else 0.01,
            epochs=args.epochs,
            batch_size=args.batch_size,
            verbose=args.verbose,
        )

    model.fit(train)
    print(f"\n{model.name()} trained successfully.")

    predictions = model.predict(test.features)

    print("\nModel Performance:")
    print(f"MSE: {mean_squared_error(test.targets, predictions):.6f}")
    print(f"RMSE: {root_mean_squared_error(test.targets, predictions):.6f}")
    print(f"MAE: {mean_absolute_error(test.targets, predictions):.6f}")

    print("\nFeature Importance:")
    for name, weight in zip(feature_names, model.weights):
        print(f"{name}: {weight:.6f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
