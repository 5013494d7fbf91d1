from splitledger.models.group import Group
from splitledger.models.group_member import GroupMember
from splitledger.models.expense import Expense
from splitledger.models.expense_split import ExpenseSplit
from splitledger.models.settlement import Settlement

__all__ = ["Group", "GroupMember", "Expense", "ExpenseSplit", "Settlement"]
