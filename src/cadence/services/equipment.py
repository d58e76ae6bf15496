"""Equipment purchase, repair, sale and wear."""
from __future__ import annotations

import logging
from decimal import Decimal
from uuid import UUID

from cadence.core.errors import NotFound
from cadence.game.catalog import EQUIPMENT_BY_ID
from cadence.game.constants import DURABILITY_LOSS_PER_USE, MAX_DURABILITY, EquipmentType, SkillType
from cadence.game.formulas import repair_cost, sell_price
from cadence.models.economy import Equipment
from cadence.models.state import GameState

logger = logging.getLogger(__name__)


class EquipmentManager:
    """Service for equipment operations."""

    def purchase(self, state: GameState, catalog_item_id: str) -> Equipment:
        item = EQUIPMENT_BY_ID.get(catalog_item_id)
        if item is None:
            raise NotFound("catalog_item", catalog_item_id)
        state.wallet.deduct_expense(item.base_price)
        equipment = Equipment(
            catalog_id=item.id,
            equipment_type=item.equipment_type,
            tier=item.tier,
            name=item.name,
            base_price=item.base_price,
            durability=MAX_DURABILITY,
        )
        state.add_equipment(equipment)
        logger.info("equipment_purchase item=%s price=%s", item.id, item.base_price)
        return equipment

    def repair_cost(self, state: GameState, equipment_id: UUID) -> Decimal:
        equipment = state.get_equipment(equipment_id)
        return repair_cost(equipment.base_price, equipment.durability)

    def repair(self, state: GameState, equipment_id: UUID) -> Decimal:
        """Restore durability to 100. Returns the cost paid."""
        equipment = state.get_equipment(equipment_id)
        cost = repair_cost(equipment.base_price, equipment.durability)
        state.wallet.deduct_expense(cost)
        equipment.durability = MAX_DURABILITY
        logger.info("equipment_repair id=%s cost=%s", equipment.id, cost)
        return cost

    def sell_price(self, state: GameState, equipment_id: UUID) -> Decimal:
        equipment = state.get_equipment(equipment_id)
        return sell_price(equipment.base_price, equipment.durability)

    def sell(self, state: GameState, equipment_id: UUID) -> Decimal:
        """Remove the item and credit its resale value."""
        equipment = state.get_equipment(equipment_id)
        price = sell_price(equipment.base_price, equipment.durability)
        state.remove_equipment(equipment_id)
        state.wallet.add_income(price)
        logger.info("equipment_sell id=%s price=%s", equipment.id, price)
        return price

    def best_equipment(self, state: GameState, skill_type: SkillType) -> Equipment | None:
        usable = [e for e in state.equipment_for_skill(skill_type) if e.is_usable]
        if not usable:
            return None
        return max(usable, key=lambda e: e.performance_bonus)

    def best_equipment_bonus(self, state: GameState, skill_type: SkillType) -> float:
        best = self.best_equipment(state, skill_type)
        return best.performance_bonus if best else 1.0

    def degrade_after_use(self, state: GameState, skill_type: SkillType) -> Equipment | None:
        """Wear only the single best usable item for the skill."""
        best = self.best_equipment(state, skill_type)
        if best is None:
            return None
        best.degrade(DURABILITY_LOSS_PER_USE)
        if not best.is_usable:
            logger.info("equipment_worn_out id=%s durability=%s", best.id, best.durability)
        return best

    def equipment_by_type(self, state: GameState, equipment_type: EquipmentType) -> list[Equipment]:
        return [e for e in state.equipment_inventory if e.equipment_type == equipment_type]

    def has_usable(self, state: GameState, equipment_type: EquipmentType) -> bool:
        return any(e.is_usable for e in self.equipment_by_type(state, equipment_type))

    def storage_slots(self, state: GameState) -> int:
        if state.current_housing is None:
            return 0
        return state.current_housing.spec.storage_slots
