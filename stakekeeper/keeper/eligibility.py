from stakekeeper.core.models import ValidatorRecord


def needs_remediation(record: ValidatorRecord) -> bool:
    """A validator is stranded when it has earned commission but holds no stake."""
    return record.total_stake == 0 and record.commission_reward > 0
