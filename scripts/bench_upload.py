#!/usr/bin/env python3
"""Benchmark document upload: fresh blobs versus deduplicated reuse.

Every generated PDF is uploaded into two projects. The first upload stores the
blob; the second hits the dedup path and only creates a document record.

Usage:
    export API_URL=http://localhost:8000
    python scripts/bench_upload.py [--num-docs 50] [--output bench_upload.txt]
"""
from __future__ import annotations

import argparse
import io
import os
import statistics
import sys
import time
import uuid

import httpx
from pypdf import PdfWriter


def make_pdf(index: int) -> bytes:
    """One blank page; the title makes each file's digest distinct."""
    writer = PdfWriter()
    writer.add_blank_page(width=595, height=842)
    writer.add_metadata({"/Title": f"Benchmark document {index}"})
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


def percentiles(latencies: list[float]) -> tuple[float, float, float]:
    n = len(latencies)
    p50 = statistics.median(latencies) * 1000
    p95 = sorted(latencies)[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = sorted(latencies)[int(n * 0.99) - 1] * 1000 if n >= 100 else p95
    return p50, p95, p99


def upload(client: httpx.Client, api_url: str, project_id: str, data: bytes, name: str) -> float | None:
    t0 = time.perf_counter()
    r = client.post(
        f"{api_url}/v1/projects/{project_id}/documents",
        files={"file": (name, data, "application/pdf")},
    )
    elapsed = time.perf_counter() - t0
    return elapsed if r.status_code == 201 else None


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark document upload")
    parser.add_argument("--num-docs", type=int, default=50, help="Number of distinct PDFs")
    parser.add_argument("--output", type=str, default="bench_upload.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    run = uuid.uuid4().hex[:8]
    first_project, second_project = f"bench-{run}-a", f"bench-{run}-b"
    pdfs = [make_pdf(i) for i in range(args.num_docs)]

    fresh: list[float] = []
    reused: list[float] = []
    errors = 0

    print(f"Uploading {args.num_docs} PDFs into two projects...")
    start_total = time.perf_counter()
    with httpx.Client(timeout=120.0) as client:
        for i, data in enumerate(pdfs):
            for project_id, bucket in ((first_project, fresh), (second_project, reused)):
                elapsed = upload(client, api_url, project_id, data, f"doc_{i}.pdf")
                if elapsed is None:
                    errors += 1
                else:
                    bucket.append(elapsed)
    total_elapsed = time.perf_counter() - start_total

    if not fresh or not reused:
        print("No successful uploads.")
        return 1

    lines = [f"Upload benchmark (n={len(fresh) + len(reused)}, errors={errors})"]
    for label, latencies in (("fresh", fresh), ("dedup", reused)):
        p50, p95, p99 = percentiles(latencies)
        lines.append(
            f"  {label}: {len(latencies) / sum(latencies):.2f} docs/s, "
            f"p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms"
        )
    lines.append(f"  Total time: {total_elapsed:.2f} s")
    summary = "\n".join(lines) + "\n"
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError:
        pass

    return 0


if __name__ == "__main__":
    sys.exit(main())
