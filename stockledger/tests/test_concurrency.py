"""
Concurrency tests: no lost updates on one position, no interference between positions.

The interleaving tests force the classic read-modify-write race
deterministically: a second adjustment runs after the first one has
read the position but before it writes. The threaded tests need real
row locks and only run on PostgreSQL.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from django.db import connection

from stockledger import ledger
from stockledger.models import StockMovement, Warehouse
from stockledger.services.movements import StockMovements


pytestmark = pytest.mark.django_db


def _interleave(monkeypatch, concurrent_call):
    """Run `concurrent_call` once, right after the next position read."""
    original = StockMovements._locate_position.__func__
    state = {'fired': False, 'seen': None}

    def locate_then_interleave(cls, product, warehouse):
        position = original(cls, product, warehouse)
        if not state['fired']:
            state['fired'] = True
            state['seen'] = position.quantity
            concurrent_call()
        return position

    monkeypatch.setattr(StockMovements, '_locate_position', classmethod(locate_then_interleave))
    return state


class TestInterleavedAdjustments:
    """Two adjustments that both read the same base quantity."""

    def test_no_lost_update_from_zero(self, monkeypatch, product, main):
        """Both +5 read 0; the position still ends at 10."""
        state = _interleave(
            monkeypatch,
            lambda: ledger.adjust(product.pk, main.pk, Decimal('5'), reason='concurrent'),
        )

        ledger.adjust(product.pk, main.pk, Decimal('5'), reason='first')

        assert state['seen'] == Decimal('0')
        assert ledger.on_hand(product, main) == Decimal('10')
        movements = ledger.history(product, main)
        assert [m.quantity for m in movements] == [Decimal('5'), Decimal('5')]

    def test_position_matches_ledger_after_race(self, monkeypatch, product, main):
        ledger.adjust(product.pk, main.pk, Decimal('20'))
        _interleave(
            monkeypatch,
            lambda: ledger.adjust(product.pk, main.pk, Decimal('-7')),
        )

        ledger.adjust(product.pk, main.pk, Decimal('3'))

        position = ledger.get_position(product, main)
        total = sum(m.quantity for m in ledger.history(product, main))
        assert position.quantity == total == Decimal('16')

    def test_different_pairs_do_not_interfere(self, monkeypatch, product, other_product, main, store):
        _interleave(
            monkeypatch,
            lambda: ledger.adjust(other_product.pk, store.pk, Decimal('2')),
        )

        ledger.adjust(product.pk, main.pk, Decimal('9'))
        ledger.adjust(other_product.pk, store.pk, Decimal('1'))
        ledger.adjust(product.pk, main.pk, Decimal('-4'))

        assert ledger.on_hand(product, main) == Decimal('5')
        assert ledger.on_hand(other_product, store) == Decimal('3')
        assert ledger.get_position(product, store) is None
        assert ledger.get_position(other_product, main) is None


class TestIndependence:
    """Any order of adjustments on separate pairs converges to each pair's sum."""

    @pytest.mark.parametrize('order', [
        ['a', 'a', 'b', 'b', 'c'],
        ['c', 'b', 'a', 'b', 'a'],
        ['b', 'a', 'c', 'a', 'b'],
    ])
    def test_each_pair_sums_its_own_deltas(self, order, product, other_product, main, store):
        deltas = {
            'a': (product, main, Decimal('3')),
            'b': (product, store, Decimal('-1.5')),
            'c': (other_product, main, Decimal('10')),
        }
        for key in order:
            prod, warehouse, delta = deltas[key]
            ledger.adjust(prod.pk, warehouse.pk, delta)

        for key, (prod, warehouse, delta) in deltas.items():
            assert ledger.on_hand(prod, warehouse) == delta * order.count(key)


requires_row_locks = pytest.mark.skipif(
    connection.vendor != 'postgresql',
    reason='threaded concurrency needs row-level locks (PostgreSQL)',
)


def _adjust_in_thread(barrier, product_pk, warehouse_pk, delta):
    try:
        barrier.wait()
        return ledger.adjust(product_pk, warehouse_pk, delta, reason='thread')
    finally:
        connection.close()


@requires_row_locks
@pytest.mark.django_db(transaction=True)
class TestThreadedAdjustments:
    """Real concurrent transactions."""

    def test_concurrent_adjustments_same_pair(self, product):
        warehouse = Warehouse.objects.create(code='T1', name='Threaded')
        workers = 8
        barrier = threading.Barrier(workers)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_adjust_in_thread, barrier, product.pk, warehouse.pk, Decimal('5'))
                for _ in range(workers)
            ]
            for future in futures:
                future.result()

        assert ledger.on_hand(product, warehouse) == Decimal('5') * workers
        assert StockMovement.objects.filter(warehouse=warehouse).count() == workers

    def test_concurrent_adjustments_different_pairs(self, product, other_product):
        first = Warehouse.objects.create(code='T2', name='Threaded A')
        second = Warehouse.objects.create(code='T3', name='Threaded B')
        jobs = [(product, first, Decimal('2'))] * 4 + [(other_product, second, Decimal('-1'))] * 4
        barrier = threading.Barrier(len(jobs))

        with ThreadPoolExecutor(max_workers=len(jobs)) as pool:
            futures = [
                pool.submit(_adjust_in_thread, barrier, prod.pk, warehouse.pk, delta)
                for prod, warehouse, delta in jobs
            ]
            for future in futures:
                future.result()

        assert ledger.on_hand(product, first) == Decimal('8')
        assert ledger.on_hand(other_product, second) == Decimal('-4')

    def test_recalculate_concurrent_with_adjustments(self, product):
        warehouse = Warehouse.objects.create(code='T4', name='Threaded Audit')
        ledger.adjust(product.pk, warehouse.pk, Decimal('1'))
        position = ledger.get_position(product, warehouse)
        workers = 8
        barrier = threading.Barrier(workers)

        def recalculate():
            try:
                barrier.wait()
                return ledger.recalculate(position)
            finally:
                connection.close()

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_adjust_in_thread, barrier, product.pk, warehouse.pk, Decimal('5'))
                for _ in range(workers // 2)
            ] + [pool.submit(recalculate) for _ in range(workers // 2)]
            for future in futures:
                future.result()

        total = sum(m.quantity for m in ledger.history(product, warehouse))
        assert total == Decimal('21')
        assert ledger.on_hand(product, warehouse) == total
