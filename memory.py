from typing import Dict, Iterable, List

PAGE_SIZE = 1024


class Memory:
    """
    Auto-growing Intcode memory.

    The loaded program lives in a contiguous base list. Addresses past the
    end of the base are served from a page table keyed by
    ``(address - len(base)) // page_size``; pages are zero-filled lists
    created on first write. Unset cells read as 0.

    Addresses must already be validated as non-negative by the caller.
    """

    def __init__(self, values: Iterable[int] = (), page_size: int = PAGE_SIZE):
        if page_size <= 0:
            raise ValueError("Page size must be at least 1")
        self._base: List[int] = list(values)
        self._pages: Dict[int, List[int]] = {}
        self.page_size = page_size

    def _locate(self, address: int):
        offset = address - len(self._base)
        return divmod(offset, self.page_size)

    def get(self, address: int) -> int:
        if address < len(self._base):
            return self._base[address]
        page_index, slot = self._locate(address)
        page = self._pages.get(page_index)
        if page is None:
            return 0
        return page[slot]

    def set(self, address: int, value: int) -> None:
        if address < len(self._base):
            self._base[address] = value
            return
        page_index, slot = self._locate(address)
        page = self._pages.get(page_index)
        if page is None:
            page = self._pages[page_index] = [0] * self.page_size
        page[slot] = value

    def contains(self, address: int) -> bool:
        """True if the address lies inside the loaded program."""
        return 0 <= address < len(self._base)

    def copy(self) -> 'Memory':
        clone = Memory(self._base, page_size=self.page_size)
        clone._pages = {index: list(page) for index, page in self._pages.items()}
        return clone

    @property
    def base(self) -> List[int]:
        return list(self._base)

    def __getitem__(self, address: int) -> int:
        return self.get(address)

    def __setitem__(self, address: int, value: int):
        self.set(address, value)

    def __contains__(self, address: int) -> bool:
        return self.contains(address)

    def __len__(self):
        return len(self._base)

    def __repr__(self):
        return f"Memory(base={len(self._base)}, pages={len(self._pages)})"
