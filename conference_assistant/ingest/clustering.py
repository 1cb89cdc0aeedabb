"""
Embedding analysis for the session dataset: K-means++ clustering, PCA projection
and cosine-similarity heatmaps. Used offline (scripts/cluster_sessions.py) to see
how the session titles group in embedding space.
"""

import logging
from dataclasses import dataclass, field

import numpy as np
import pandas as pd
import plotly.express as px
from plotly.graph_objects import Figure
from sklearn.cluster import KMeans
from sklearn.metrics.pairwise import cosine_similarity

logger = logging.getLogger(__name__)

KMEANS_MAX_ITERATIONS = 100


@dataclass(frozen=True)
class EmbeddingPoint:
    coordinates: tuple[float, ...]
    original_index: int


@dataclass
class CentroidCluster:
    center: list[float]
    points: list[EmbeddingPoint] = field(default_factory=list)


@dataclass
class ClusterData:
    cluster_name: str
    values: list[str]


@dataclass
class PCAResult:
    projected: list[list[float]]
    explained_variance: list[float]        # per component
    explained_variance_ratio: list[float]  # per component


@dataclass(frozen=True)
class SimilarityMatrixEntry:
    sentence1: str
    sentence2: str
    similarity: float


def perform_kmeans_clustering(
    embeddings: list[list[float]], k: int, random_state: int | None = None
) -> list[CentroidCluster]:
    """
    Cluster embedding vectors into k groups with K-means++ initialisation.

    Each returned cluster holds its centroid and the points assigned to it; points
    remember their position in `embeddings`. Raises ValueError when k is not in
    1..len(embeddings).
    """
    if k < 1 or k > len(embeddings):
        raise ValueError(f"k must be between 1 and {len(embeddings)}, got {k}")
    matrix = np.asarray(embeddings, dtype=float)
    model = KMeans(
        n_clusters=k,
        init="k-means++",
        max_iter=KMEANS_MAX_ITERATIONS,
        n_init=1,
        random_state=random_state,
    ).fit(matrix)
    clusters = [CentroidCluster(center=center.tolist()) for center in model.cluster_centers_]
    for index, label in enumerate(model.labels_):
        clusters[int(label)].points.append(EmbeddingPoint(tuple(matrix[index].tolist()), index))
    logger.info("[clustering:perform_kmeans_clustering] IN  points=%d k=%d OUT sizes=%s",
                len(embeddings), k, [len(c.points) for c in clusters])
    return clusters


def cluster_assignments(clusters: list[CentroidCluster]) -> list[int]:
    """Cluster index of every original point, in input order."""
    pairs = [
        (point.original_index, cluster_index)
        for cluster_index, cluster in enumerate(clusters)
        for point in cluster.points
    ]
    return [cluster_index for _, cluster_index in sorted(pairs)]


def values_per_cluster(clusters: list[CentroidCluster], values: list[str]) -> list[ClusterData]:
    grouped: dict[int, list[str]] = {}
    for index, cluster_index in enumerate(cluster_assignments(clusters)):
        grouped.setdefault(cluster_index, []).append(values[index])
    data = [
        ClusterData(f"=== Cluster {cluster_index} ({len(items)} items) ===", items)
        for cluster_index, items in grouped.items()
    ]
    return sorted(data, key=lambda d: d.cluster_name)


def print_values_per_cluster(clusters: list[CentroidCluster], titles: list[str]) -> None:
    for data in values_per_cluster(clusters, titles):
        print(data.cluster_name)
        for idx, value in enumerate(data.values, start=1):
            print(f"  {idx}. {value}")
        print()


def pca(data: list[list[float]], target_dimensions: int = 2) -> PCAResult:
    """
    Project data onto its top principal components.

    The data is centred, decomposed with SVD (Xc = U S V^T) and projected onto the
    first min(target_dimensions, n, d) columns of V. Explained variance per
    component is s^2 / (n - 1).
    """
    if not data:
        raise ValueError("data must not be empty")
    x = np.asarray(data, dtype=float)
    n, d = x.shape
    k = min(target_dimensions, n, d)

    xc = x - x.mean(axis=0)
    _, singular_values, vt = np.linalg.svd(xc, full_matrices=False)
    k = min(k, len(singular_values))

    denominator = max(n - 1, 1)
    variances = singular_values ** 2 / denominator
    total = max(float(variances.sum()), 1e-12)
    explained = variances[:k]

    projected = xc @ vt[:k].T
    return PCAResult(
        projected=projected.tolist(),
        explained_variance=explained.tolist(),
        explained_variance_ratio=(explained / total).tolist(),
    )


def perform_pca(data: list[list[float]], target_dimensions: int = 2) -> list[list[float]]:
    return pca(data, target_dimensions).projected


def plot_cluster_values(
    clusters: list[CentroidCluster], embeddings: list[list[float]], titles: list[str]
) -> Figure:
    embeddings_2d = perform_pca(embeddings, 2)
    logger.info("[clustering:plot_cluster_values] reduced embeddings to 2D: %d points", len(embeddings_2d))
    frame = pd.DataFrame({
        "x": [p[0] for p in embeddings_2d],
        "y": [p[1] if len(p) > 1 else 0.0 for p in embeddings_2d],
        "cluster": [f"Cluster {c}" for c in cluster_assignments(clusters)],
        "title": titles,
    })
    fig = px.scatter(
        frame,
        x="x",
        y="y",
        color="cluster",
        hover_data=["title", "cluster"],
        title="K-Means Clustering of Conference Session Titles (PCA Projection)",
        labels={"x": "First Principal Component", "y": "Second Principal Component"},
        width=800,
        height=600,
    )
    fig.update_traces(marker={"size": 8})
    return fig


def cosine_similarity_matrix(sentences: list[str], embeddings: list[list[float]]) -> list[SimilarityMatrixEntry]:
    if len(sentences) != len(embeddings):
        raise ValueError("sentences and embeddings must have the same length")
    if not sentences:
        return []
    similarities = cosine_similarity(np.asarray(embeddings, dtype=float))
    return [
        SimilarityMatrixEntry(s1, s2, float(similarities[i][j]))
        for i, s1 in enumerate(sentences)
        for j, s2 in enumerate(sentences)
    ]


def plot_similarity_matrix(entries: list[SimilarityMatrixEntry]) -> Figure:
    frame = pd.DataFrame(
        [{"Sentence1": e.sentence1, "Sentence2": e.sentence2, "Similarity": e.similarity} for e in entries]
    )
    matrix = frame.pivot_table(index="Sentence2", columns="Sentence1", values="Similarity", sort=False)
    return px.imshow(
        matrix,
        color_continuous_scale="Viridis",
        title="Sentence Similarity Heatmap (Cosine Similarity)",
        width=800,
        height=600,
    )
