#!/usr/bin/env python3
"""
Cluster the conference session titles by their embeddings.

Embeds every session title of data/dataset-jfall.json, runs K-means++ and prints
the titles per cluster. With --plot, writes the 2-D PCA projection of the
clusters as an interactive HTML file.

Run from project root:

    python scripts/cluster_sessions.py
    python scripts/cluster_sessions.py --k 6 --plot clusters.html
"""

import argparse
import logging
import sys
from pathlib import Path

# Project root on path so "conference_assistant" resolves
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from conference_assistant.ingest.clustering import (
    perform_kmeans_clustering,
    plot_cluster_values,
    print_values_per_cluster,
)
from conference_assistant.ingest.loader import read_sessions_frame
from conference_assistant.services.vector_store import embed_texts


def main() -> None:
    parser = argparse.ArgumentParser(description="K-means clustering of session titles.")
    parser.add_argument("--k", type=int, default=5, help="Number of clusters (default 5).")
    parser.add_argument("--plot", type=Path, default=None, help="Write the PCA scatter plot to this HTML file.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    titles = [str(t) for t in read_sessions_frame()["title"].dropna().tolist()]
    if not titles:
        print("No sessions found.")
        return
    embeddings = embed_texts(titles)
    clusters = perform_kmeans_clustering(embeddings, min(args.k, len(titles)))
    print_values_per_cluster(clusters, titles)

    if args.plot:
        plot_cluster_values(clusters, embeddings, titles).write_html(str(args.plot))
        print(f"Plot written to {args.plot}")


if __name__ == "__main__":
    main()
