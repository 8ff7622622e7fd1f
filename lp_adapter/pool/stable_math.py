"""Balancer stable pool math for BPT exits.

Invariant and balance solvers use Newton-Raphson iteration; the exit
functions follow Balancer's StableMath.sol, charging the swap fee only on the
part of an exit that is not proportional to the pool's current balances.

IMPORTANT: All calculations use SafeInt / Bfp integer arithmetic. Rounding
always favours the pool: BPT charged rounds up, tokens paid round down.
"""

from lp_adapter.math.fixed_point import AMP_PRECISION, Bfp
from lp_adapter.safe_int import S

from .errors import StableGetBalanceDidNotConverge, StableInvariantDidNotConverge, ZeroBalanceError

# Maximum iterations for Newton-Raphson convergence
_STABLE_MAX_ITERATIONS = 255


def calculate_invariant(amp: int, balances: list[Bfp]) -> Bfp:
    """Calculate StableSwap invariant D using Newton-Raphson iteration.

    Uses Balancer's parameterization where the Newton-Raphson formula uses
    A*n (not A*n^n).

    Algorithm:
        1. Initial guess: D = sum(balances)
        2. Iterate until |D_new - D_old| <= 1 wei
        3. Max iterations: 255

    Args:
        amp: Amplification parameter (scaled by AMP_PRECISION=1000)
        balances: Token balances, already scaled to 18 decimals

    Returns:
        The invariant D as Bfp

    Raises:
        StableInvariantDidNotConverge: If iteration doesn't converge
        ZeroBalanceError: If any balance is zero
    """
    n_coins = len(balances)
    if n_coins == 0:
        return Bfp(0)

    for i, bal in enumerate(balances):
        if bal.value <= 0:
            raise ZeroBalanceError(f"Balance at index {i} must be positive")

    sum_balances = S(sum(b.value for b in balances))
    d_prev = sum_balances
    amp_times_n = S(amp) * S(n_coins)

    for _ in range(_STABLE_MAX_ITERATIONS):
        # d_p = D^(n+1) / (n^n * prod(balances)), built one balance at a time
        d_p = d_prev
        for bal in balances:
            d_p = (d_p * d_prev) // (S(n_coins) * S(bal.value))

        term1 = (amp_times_n * sum_balances) // S(AMP_PRECISION)
        numerator = (term1 + d_p * S(n_coins)) * d_prev

        term2 = ((amp_times_n - S(AMP_PRECISION)) * d_prev) // S(AMP_PRECISION)
        denominator = term2 + S(n_coins + 1) * d_p

        d_new = numerator // denominator

        if d_new.abs_diff(d_prev) <= 1:
            return Bfp(d_new.value)

        d_prev = d_new

    raise StableInvariantDidNotConverge(
        f"Stable invariant did not converge after {_STABLE_MAX_ITERATIONS} iterations"
    )


def get_token_balance_given_invariant_and_all_other_balances(
    amp: int,
    balances: list[Bfp],
    invariant: Bfp,
    token_index: int,
) -> Bfp:
    """Solve for balances[token_index] given D and all other balances.

    Matches StableMath._getTokenBalanceGivenInvariantAndAllOtherBalances:
    the current value at token_index takes part in the c term.

    Raises:
        StableGetBalanceDidNotConverge: If iteration doesn't converge
        IndexError: If token_index is out of range
    """
    n_coins = len(balances)
    if token_index < 0 or token_index >= n_coins:
        raise IndexError(f"token_index {token_index} out of range for {n_coins} tokens")

    d = S(invariant.value)
    amp_times_total = S(amp) * S(n_coins)

    sum_balances = S(balances[0].value)
    p_d = S(balances[0].value) * S(n_coins)
    for j in range(1, n_coins):
        p_d = (p_d * S(balances[j].value) * S(n_coins)) // d
        sum_balances = sum_balances + S(balances[j].value)

    sum_others = sum_balances - S(balances[token_index].value)
    inv2 = d * d

    amp_times_p_d = amp_times_total * p_d
    if amp_times_p_d == 0:
        raise StableGetBalanceDidNotConverge("amp_times_p_d is zero")
    c = inv2.ceiling_div(amp_times_p_d) * S(AMP_PRECISION) * S(balances[token_index].value)
    b = sum_others + (d // amp_times_total) * S(AMP_PRECISION)

    token_balance = (inv2 + c).ceiling_div(d + b)

    for _ in range(_STABLE_MAX_ITERATIONS):
        prev_token_balance = token_balance

        # y = (y^2 + c) / (2y + b - D), rounded up
        denominator_sum = S(2) * token_balance + b
        if denominator_sum <= d:
            raise StableGetBalanceDidNotConverge("Denominator became non-positive")
        token_balance = (token_balance * token_balance + c).ceiling_div(denominator_sum - d)

        if token_balance.abs_diff(prev_token_balance) <= 1:
            return Bfp(token_balance.value)

    raise StableGetBalanceDidNotConverge(
        f"Stable get_balance did not converge after {_STABLE_MAX_ITERATIONS} iterations"
    )


def calc_token_out_given_exact_bpt_in(
    amp: int,
    balances: list[Bfp],
    token_index: int,
    bpt_amount_in: int,
    bpt_total_supply: int,
    swap_fee: Bfp,
) -> Bfp:
    """Tokens paid out for burning an exact amount of BPT (single-token exit).

    Algorithm:
        1. New invariant = D * (supply - bpt_in) / supply (rounded up)
        2. Solve the exit token's balance for the new invariant
        3. Charge the swap fee on the share of the output that exceeds the
           token's current weight in the pool

    Args:
        amp: Amplification parameter (scaled by AMP_PRECISION)
        balances: Scaled token balances (18 decimals)
        token_index: Index of the exit token
        bpt_amount_in: BPT burned
        bpt_total_supply: BPT supply before the exit
        swap_fee: Swap fee as Bfp

    Returns:
        Scaled output amount of the exit token

    Raises:
        ZeroBalanceError: If bpt_amount_in exceeds the supply or a balance is zero
        StableInvariantDidNotConverge / StableGetBalanceDidNotConverge
    """
    if bpt_total_supply <= 0:
        raise ZeroBalanceError("BPT total supply must be positive")
    if bpt_amount_in > bpt_total_supply:
        raise ZeroBalanceError(
            f"bpt_amount_in {bpt_amount_in} exceeds total supply {bpt_total_supply}"
        )

    current_invariant = calculate_invariant(amp, balances)

    supply = Bfp(bpt_total_supply)
    new_invariant = Bfp(bpt_total_supply - bpt_amount_in).div_up(supply).mul_up(current_invariant)

    new_balance = get_token_balance_given_invariant_and_all_other_balances(
        amp, balances, new_invariant, token_index
    )
    amount_out_without_fee = balances[token_index].sub(new_balance)

    sum_balances = Bfp(sum(b.value for b in balances))
    current_weight = balances[token_index].div_down(sum_balances)
    taxable_percentage = current_weight.complement()

    taxable_amount = amount_out_without_fee.mul_up(taxable_percentage)
    non_taxable_amount = amount_out_without_fee.sub(taxable_amount)

    return non_taxable_amount.add(taxable_amount.mul_down(swap_fee.complement()))


def calc_bpt_in_given_exact_tokens_out(
    amp: int,
    balances: list[Bfp],
    amounts_out: list[Bfp],
    bpt_total_supply: int,
    swap_fee: Bfp,
) -> int:
    """BPT that must be burned to withdraw exact token amounts.

    Algorithm:
        1. Weighted average of the per-token balance ratios gives the
           invariant ratio a proportional exit would have
        2. Any token withdrawn beyond that proportion is charged the swap fee
        3. BPT in = supply * (1 - D_new / D_old), rounded up

    Args:
        amp: Amplification parameter (scaled by AMP_PRECISION)
        balances: Scaled token balances (18 decimals)
        amounts_out: Scaled amounts to withdraw, one per token (zeros allowed)
        bpt_total_supply: BPT supply before the exit
        swap_fee: Swap fee as Bfp

    Returns:
        BPT amount in (18 decimals)

    Raises:
        ZeroBalanceError: If an amount out would drain its token's balance
        ValueError: If balances and amounts_out differ in length
    """
    if len(amounts_out) != len(balances):
        raise ValueError(
            f"amounts_out has {len(amounts_out)} entries for {len(balances)} balances"
        )
    for i, (balance, amount_out) in enumerate(zip(balances, amounts_out, strict=True)):
        if amount_out.value >= balance.value and amount_out.value > 0:
            raise ZeroBalanceError(f"amount_out at index {i} must be less than its balance")

    current_invariant = calculate_invariant(amp, balances)
    sum_balances = Bfp(sum(b.value for b in balances))

    balance_ratios_without_fee: list[Bfp] = []
    invariant_ratio_without_fees = Bfp(0)
    for balance, amount_out in zip(balances, amounts_out, strict=True):
        current_weight = balance.div_up(sum_balances)
        ratio = Bfp((S(balance.value) - S(amount_out.value)).value).div_up(balance)
        balance_ratios_without_fee.append(ratio)
        invariant_ratio_without_fees = invariant_ratio_without_fees.add(
            ratio.mul_up(current_weight)
        )

    fee_complement = swap_fee.complement()
    new_balances: list[Bfp] = []
    for balance, amount_out, ratio in zip(
        balances, amounts_out, balance_ratios_without_fee, strict=True
    ):
        if invariant_ratio_without_fees > ratio:
            non_taxable_amount = balance.mul_down(invariant_ratio_without_fees.complement())
            taxable_amount = amount_out.sub(non_taxable_amount)
            amount_out_with_fee = non_taxable_amount.add(taxable_amount.div_up(fee_complement))
        else:
            amount_out_with_fee = amount_out

        if amount_out_with_fee.value >= balance.value and amount_out_with_fee.value > 0:
            raise ZeroBalanceError("Exit including fees would drain a pool balance")
        new_balances.append(Bfp(balance.value - amount_out_with_fee.value))

    new_invariant = calculate_invariant(amp, new_balances)
    invariant_ratio = new_invariant.div_down(current_invariant)

    return Bfp(bpt_total_supply).mul_up(invariant_ratio.complement()).value
