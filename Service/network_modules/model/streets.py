"""
Service/network_modules/model/streets.py

랜드마크 참조의 순서열로 구성된 도로 형상을 관리하는 모듈입니다.
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Set, Tuple

from .errors import TopologyIntegrityError
from .landmarks import LandmarkStore

# (도로 id, 삽입 위치, 시작 랜드마크, 끝 랜드마크)
Segment = Tuple[int, int, int, int]


class StreetTopology:
    """
    도로 id별 랜드마크 순서열과 랜드마크 -> 도로 역색인을 함께 유지합니다.
    """

    def __init__(self):
        self._streets: Dict[int, List[int]] = {}
        self._referrers: Dict[int, Set[int]] = {}

    def __len__(self) -> int:
        return len(self._streets)

    def __contains__(self, street_id: object) -> bool:
        return street_id in self._streets

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._streets))

    def ids(self) -> List[int]:
        return sorted(self._streets)

    def landmarks_of(self, street_id: int) -> Tuple[int, ...]:
        return tuple(self._streets[street_id])

    def items(self) -> Iterator[Tuple[int, Tuple[int, ...]]]:
        for street_id in self.ids():
            yield street_id, tuple(self._streets[street_id])

    def next_id(self) -> int:
        return max(self._streets, default=-1) + 1

    def add_street(self, street_id: int, landmark_ids: Iterable[int]) -> None:
        """도로를 등록합니다. 같은 id가 있으면 교체합니다."""
        self.remove_street(street_id)
        refs = list(landmark_ids)
        self._streets[street_id] = refs
        for lid in refs:
            self._referrers.setdefault(lid, set()).add(street_id)

    def remove_street(self, street_id: int) -> bool:
        """도로를 삭제합니다. 이미 없으면 아무것도 하지 않습니다."""
        refs = self._streets.pop(street_id, None)
        if refs is None:
            return False
        for lid in refs:
            owners = self._referrers.get(lid)
            if owners is None:
                continue
            owners.discard(street_id)
            if not owners:
                del self._referrers[lid]
        return True

    def contains_landmark(self, street_id: int, landmark_id: int) -> bool:
        return street_id in self._referrers.get(landmark_id, ())

    def insert_landmark_at(self, street_id: int, index: int, landmark_id: int) -> bool:
        """
        도로 순서열의 index 위치에 랜드마크 참조를 삽입합니다.
        한 도로 안에 같은 랜드마크가 이미 있으면 삽입하지 않습니다.

        Returns:
            bool: 실제 삽입 여부
        """
        refs = self._streets[street_id]
        if self.contains_landmark(street_id, landmark_id):
            return False
        if not 0 <= index <= len(refs):
            raise IndexError(f"삽입 위치가 범위를 벗어났습니다: 도로={street_id}, index={index}, 길이={len(refs)}")
        refs.insert(index, landmark_id)
        self._referrers.setdefault(landmark_id, set()).add(street_id)
        return True

    def streets_referencing(self, landmark_id: int) -> List[int]:
        return sorted(self._referrers.get(landmark_id, ()))

    def remove_streets_referencing(self, landmark_id: int) -> int:
        """해당 랜드마크를 포함하는 모든 도로를 통째로 삭제하고 삭제 수를 반환합니다."""
        removed = 0
        for street_id in self.streets_referencing(landmark_id):
            if self.remove_street(street_id):
                removed += 1
        return removed

    def referenced_landmarks(self) -> Set[int]:
        return set(self._referrers)

    def segments(self, street_id: int) -> Iterator[Segment]:
        """연속한 랜드마크 쌍을 (도로 id, 끝점의 위치, 시작, 끝) 형태로 순회합니다."""
        refs = self._streets[street_id]
        for index in range(1, len(refs)):
            yield street_id, index, refs[index - 1], refs[index]

    def iter_segments(self) -> Iterator[Segment]:
        for street_id in self.ids():
            yield from self.segments(street_id)

    def check_completeness(self, store: LandmarkStore) -> None:
        """
        모든 도로가 참조하는 랜드마크가 저장소에 존재하는지 확인합니다.

        Raises:
            TopologyIntegrityError: 누락된 랜드마크가 하나라도 있는 경우
        """
        for street_id in self.ids():
            for lid in self._streets[street_id]:
                if lid not in store:
                    raise TopologyIntegrityError(
                        "도로가 참조하는 랜드마크를 찾을 수 없습니다", street_id=street_id, landmark_id=lid
                    )
