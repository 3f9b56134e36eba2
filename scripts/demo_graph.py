from datetime import datetime, timezone
from src.flow.view import build_history_view
from src.graph.models import Branch, Commit

# Sample history, newest first (dates in milliseconds, as the UI mocks use)
COMMITS = [
    Commit("c3d4e5f", "developer", "Merge branch feature/navigation", 1739511000000, ["a1b2c3d", "b2c3d4e"]),
    Commit("b2c3d4e", "developer", "feat(ui): redesign navigation component", 1739508000000, ["040ecb9"]),
    Commit("a1b2c3d", "developer", "Merge branch feature/auth into main", 1739510000000, ["8c0977e", "f4e5d6c"]),
    Commit("f4e5d6c", "developer", "feat(auth): add login form validation", 1739509000000, ["6f85307"]),
    Commit("8c0977e", "fabric0de", "test(branch): make default branch handling CI-safe", 1739410100000, ["6f85307"]),
    Commit("6f85307", "fabric0de", "ci: add release-please workflow and manifest config", 1739409000000, ["040ecb9"]),
    Commit("040ecb9", "fabric0de", "chore: align repository with OSS baseline conventions", 1739407000000, ["79aa523"]),
    Commit("79aa523", "fabric0de", "chore: add local commit-msg hook for conventional commits", 1739405000000, ["c971d4e"]),
]

BRANCHES = [
    Branch("main", is_current=True, target_hash="c3d4e5f"),
    Branch("feature/auth", target_hash="f4e5d6c"),
    Branch("origin/feature/navigation", is_remote=True, target_hash="b2c3d4e"),
]

def main():
    view = build_history_view(COMMITS, BRANCHES)
    layout = view.layout

    print(f"Graph: {layout.lane_count} lanes, {len(layout.edges)} edges, {layout.width}x{layout.height}px\n")
    for row, commit in enumerate(COMMITS):
        lane = layout.lane_by_row[row]
        marker = "M" if commit.is_merge else "*"
        cells = [marker if i == lane else "|" for i in range(layout.lane_count)]
        label = view.labels.get(commit.hash, "detached")
        print(f"{' '.join(cells)}  {commit.hash[:7]} [{label}] {commit.summary}")

    print("\nFlow groups:")
    for group in view.groups:
        when = datetime.fromtimestamp(group.started_at, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")
        relations = ", ".join(f"{r.label} x{r.count}" for r in group.relations)
        authors = ", ".join(group.authors)
        print(f"- {group.id[:7]} {group.branch_label}/{group.type_label} ({len(group)} commits, {when}) {relations} by {authors}")

if __name__ == "__main__":
    main()
