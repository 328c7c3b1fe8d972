"""Rules — правила конверсий, сгруппированные по семейству источника."""
