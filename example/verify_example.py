from universal_sig import create_async_web3, verify_hash, verify_message

rpc_url = "https://eth.llamarpc.com"  # Replace with your node
signer = "0xxxx"  # EOA, ERC-1271 wallet, or counterfactual account
signature = "0xxxx"  # Plain, or ERC-6492 wrapped for undeployed wallets

w3 = create_async_web3(rpc_url=rpc_url)

async def main():
    by_message = await verify_message(
        w3,
        address=signer,
        message="hello world",
        signature=signature,
    )
    by_hash = await verify_hash(
        w3,
        address=signer,
        hash="0xd9eba16ed0ecae432b71fe008c98cc872bb4cc214d3220a1f9c8ad2ce5bd2bb6",
        signature=signature,
        block_tag="latest",
    )
    return by_message, by_hash


if __name__ == "__main__":
    import asyncio
    print("Valid:", asyncio.run(main()))
