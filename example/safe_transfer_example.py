from safe_erc20 import SafeERC20, Web3Invoker, build_permit_call_data

# Reads SAFE_ERC20_PRIVATE_KEY / SAFE_ERC20_RPC_URL when not passed explicitly
invoker = Web3Invoker(
    private_key="0xxxx",  # Replace with actual key
    rpc_url="https://ethereum-sepolia-rpc.publicnode.com",
)
safe = SafeERC20(invoker)

usdc = "0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238"
router = "0x1234567890123456789012345678901234567890"


async def main():
    balance = await safe.safe_balance_of(usdc, invoker.address)
    print("Balance:", balance)

    await safe.safe_increase_allowance(usdc, router, 800000)
    print("Allowance:", await safe.safe_allowance(usdc, invoker.address, router))

    call_data = build_permit_call_data(
        private_key="0xxxx",
        token=usdc,
        chain_id=11155111,
        owner=invoker.address,
        spender=router,
        value=800000,
        nonce=0,
        deadline=1900000000,
        domain_name="USDC",
        domain_version="2",
    )
    applied = await safe.safe_permit(usdc, call_data)
    print("Permit applied:", applied)


if __name__ == "__main__":
    import asyncio
    asyncio.run(main())
