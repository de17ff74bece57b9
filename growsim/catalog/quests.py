"""Starter quests."""

from growsim.catalog.types import Currency, QuestTemplate, QuestType

QUESTS = (
    QuestTemplate("harvest-3", QuestType.HARVEST, goal=3, reward=75, reward_currency=Currency.NUGS),
    QuestTemplate("sell-100", QuestType.SELL, goal=100, reward=150, reward_currency=Currency.NUGS),
    QuestTemplate("water-10", QuestType.WATER, goal=10, reward=20, reward_currency=Currency.BUDS),
)
