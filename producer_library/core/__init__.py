"""
Core domain models, errors, configuration and contracts.

Не зависит от платёжного канала и от способа доставки вызовов
(HTTP, CLI и т.п.).
"""
