# scripts/predict_csv.py

from __future__ import annotations

import sys

from direction_ml.dataset import load_observations, observations_to_frame
from direction_ml.explain import confidence_label, explain_prediction
from direction_ml.features import extract_latest_features, extract_training_examples
from direction_ml.modeling import InsufficientDataError, evaluate_model
from direction_ml.prediction import predict_next_day


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.predict_csv FILE.csv")
        sys.exit(1)

    csv_path = sys.argv[1]
    print(f"[predict_csv] Reading {csv_path}...")

    try:
        observations = load_observations(csv_path)
    except FileNotFoundError:
        print(f"[predict_csv] File not found: {csv_path}")
        sys.exit(1)
    except ValueError as e:
        # pandas parser errors are ValueErrors too
        print(f"[predict_csv] Could not read observations from {csv_path}: {e}")
        sys.exit(1)

    try:
        result, model = predict_next_day(observations)
    except InsufficientDataError as e:
        print(f"[predict_csv] Cannot predict: {e}")
        sys.exit(1)

    latest = extract_latest_features(observations)
    reasons = explain_prediction(latest, model, top_k=5)
    metrics = evaluate_model(model, extract_training_examples(observations))

    print("\n=== Most recent observations ===")
    print(observations_to_frame(observations).tail(5).to_string(index=False))

    print(f"\n=== Next-day prediction after {observations[-1].date} ===")
    print(f"  Direction: {result.direction}")
    print(f"  Probability of a rise: {result.probability}%")
    print(f"  Confidence: {confidence_label(result.probability)}")
    print(
        f"  Training: {metrics.n_examples} examples, {model.iterations} iterations, "
        f"in-sample accuracy={metrics.accuracy:.3f}"
    )
    print("  Key reasons:")
    for r in reasons:
        print(f"   - ({r['direction']}) {r['text']}  [contrib={r['contribution']:.3f}]")

    print("\n⚠️  This is a research tool only, not financial advice.")


if __name__ == "__main__":
    main()
