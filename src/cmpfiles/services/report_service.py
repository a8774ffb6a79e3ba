"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_service.py
Turns a finished CompareReport into what the presentation layer shows.
Pairs are always rendered in enumeration order.
"""
from typing import Dict, List

from cmpfiles.core.models import CompareReport, MatchGroup, MatchState, PairResult

ALL_MATCHED_MESSAGE = "All files data content is matched, byte by byte!"


class ReportService:
    @staticmethod
    def describe_pair(result: PairResult) -> str:
        if result.state is MatchState.MATCHED:
            return f"{result.identity_a} and {result.identity_b} match!"
        if result.state is MatchState.NOT_MATCHED:
            return f"{result.identity_a} and {result.identity_b} do not match!"
        return f"{result.identity_a} and {result.identity_b} matching state is unknown!"

    @staticmethod
    def describe_pairs(report: CompareReport, only_matching: bool = False) -> List[str]:
        """
        One line per pair, in enumeration order.

        Args:
            report: Finished comparison report.
            only_matching: Leave out pairs whose data did not match.

        Returns:
            A single summary line when everything matched, otherwise one line per pair.
        """
        if report.all_matched:
            return [ALL_MATCHED_MESSAGE]

        lines = []
        for result in report.results:
            if only_matching and result.state is MatchState.NOT_MATCHED:
                continue
            lines.append(ReportService.describe_pair(result))
        return lines

    @staticmethod
    def matched_groups(report: CompareReport) -> List[MatchGroup]:
        """
        Groups sources connected by MATCHED pairs.

        Byte equality is transitive, so every group is a set of sources whose
        data is identical. Sources without any match are left out. Groups and
        their members keep the order of the source list.
        """
        parent: Dict[int, int] = {index: index for index in range(len(report.identities))}

        def find(index: int) -> int:
            while parent[index] != index:
                parent[index] = parent[parent[index]]
                index = parent[index]
            return index

        for result in report.matched:
            root_a, root_b = find(result.pair.a), find(result.pair.b)
            if root_a != root_b:
                parent[max(root_a, root_b)] = min(root_a, root_b)

        members: Dict[int, List[int]] = {}
        for index in range(len(report.identities)):
            members.setdefault(find(index), []).append(index)

        groups = []
        for root in sorted(members):
            indexes = members[root]
            if len(indexes) < 2:
                continue
            identities = [report.identities[i] for i in indexes]
            groups.append(MatchGroup(
                identities=identities,
                fingerprint=report.fingerprints.get(identities[0]),
            ))
        return groups
