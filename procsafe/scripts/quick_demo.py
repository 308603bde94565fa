#!/usr/bin/env python3
"""Quick demo of the procedure safety prompts."""

import logging

from procsafe.services.catalog_service import list_procedures
from procsafe.services.history_service import HistoryAnalyzer

EXAMPLE_HISTORY = (
    "78F with AF on apixaban. Left-sided lymphoedema post-mastectomy. "
    "Facial trauma from fall yesterday."
)


def demo():
    """Run the example history against every procedure."""
    analyzer = HistoryAnalyzer()

    print("\n" + "=" * 60)
    print("Procedure Safety Prompts - Quick Demo")
    print("=" * 60 + "\n")
    print("History:")
    print("-" * 60)
    print(EXAMPLE_HISTORY)

    for info in list_procedures():
        result = analyzer.analyze(EXAMPLE_HISTORY, info.id)

        print(f"\n{info.name}")
        print("-" * 60)
        if not result.issues:
            print("  No tailored prompts")
        for issue in result.prompts:
            print(f"  [{issue.severity.value}] {issue.category.value}: {issue.text}")
        for issue in result.red_flags:
            print(f"  RED FLAG: {issue.text}")

    print()


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    demo()
