"""
trend-radar core package.

Modules
───────
models      — Pydantic data models (raw dataset shape + engine types)
normalizer  — dataset → flat, ordered TopicObservation list
aggregator  — per-topic totals (first-seen type), dedup, cross-platform totals
ranker      — stable descending sort + top-N truncation
classifier  — high-demand / untapped buckets by threshold
overlap     — per-source overlap percentage against a reference topic set
engagement  — per-platform monthly activity and newsroom topic counts
dashboard   — full report pipeline used by the web layer
dataset     — JSON dataset loading
users       — SQLite-backed signup / login store
"""
