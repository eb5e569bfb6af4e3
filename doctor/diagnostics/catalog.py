from __future__ import annotations

from typing import List, Optional

from doctor.contracts.diagnostics import AT_HEIGHT_ENDPOINT, CHAIN_ENDPOINT, AssetQuery, ExpectedAssetState
from doctor.diagnostics.cases import (
    BlockCheck,
    DiagnosticCase,
    FetchCase,
    SharedChainFrontierCase,
    SharedChainLengthCase,
    frontier,
)

# -------------------------
# Test accounts
# -------------------------

ISSUER = "ban_1ty5s13h9tg9f57gwsto8njkzejfu9tjasc8a9mn1wujfxib8dj7w54jg3qm"
RECIPIENT = "ban_1twos81eoq9s6d1asht5wwz53m9kw7hkuajad1m4u5otgcsb4qstymquhahf"
RELAY = "ban_1oozinhbrw7nrjfmtq1roybi8t7q7jywwne4pjto7oy78injdmn4n3a5w5br"
SWEEP_ISSUER = "ban_1sweep4n54fbbrzaj1cnr7drf4udbf6f66un3zikhwm6f497pk5ftar3tekj"
SWAP_ISSUER = "ban_1swapxh34bjstbc8c5tonbncw5nrc6sgk7h71bxtetty3huiqcj6mja9rxjt"
SWAP_BUYER = "ban_1buyayd6csb1rwprgcks9sif66hthrbu9jah5ehspmsxghi63ter8f66cy1p"
CANCEL_ISSUER = "ban_3cantszxkej3kzcjjpxcu35jcn6ck884uu3q8ypd3xc1e1y61tt6jj7p99yd"
TESTER = "ban_3testz6spgm48ax8kcwah6swo59sroqfn94fqsgq368z7ki44ccg8hhrx3x8"

# Frontier of every asset parked in a pending atomic swap with TESTER.
PENDING_SWAP_FRONTIER = "024ACA494596E054C94E86A11C881018F6A0D73B108D1A0D15A66F91ADCEC1D8"

# Fetched once during setup; see SharedChainLengthCase / SharedChainFrontierCase.
SHARED_CHAIN_QUERY = AssetQuery(
    endpoint=CHAIN_ENDPOINT,
    issuer=SWAP_ISSUER,
    mint_block_hash="439F5CB566E957576C2473B7AF6F3D7D17FBF5022685EB70ED825EAC3B84A56A",
)


def _state(mint: str, block_hash: str, account: str, owner: str = "", locked: bool = False, verified: bool = True) -> ExpectedAssetState:
    return ExpectedAssetState(
        mint_block_hash=mint,
        block_hash=block_hash,
        account=account,
        owner=owner or account,
        locked=locked,
        verified=verified,
    )


def _unreceived(mint: str, account: str, verified: bool = True) -> ExpectedAssetState:
    # Nothing received yet: the frontier is still the mint block.
    return _state(mint, mint, account, verified=verified)


def default_catalog() -> List[DiagnosticCase]:
    return [
        FetchCase(
            name="confirms change#mint > send#asset > receive#asset",
            checks=(
                frontier(ISSUER, _state(
                    "F61CCF94D6E5CFE9601C436ACC3976AF876D1DA21909FEB88B629BEDEC4DF1EA",
                    "201D206790E46B4CB24CA9F0DB370F8F4BA2E905D66E8DE825D36A9D0E775DAB",
                    RECIPIENT,
                )),
            ),
        ),
        FetchCase(
            name="confirms send#mint > receive#asset",
            checks=(
                frontier(ISSUER, _state(
                    "EFE6CCFDE4FD56E60F302F22DCF41E736F611124E3F463135FDC31769A68B970",
                    "F00B3B6F2F7CD59B7383F3950CF554B22379F79D3AB607D74FDFA91EC55ED0C0",
                    RECIPIENT,
                )),
            ),
        ),
        FetchCase(
            name="send all NFTs command sends all NFTs",
            checks=(
                # sent with send all assets, received, then parked in send#atomic_swap / receive#atomic_swap
                frontier(SWEEP_ISSUER, _state(
                    "698625D8B57D695D45D4597EF5EEBC7DC31B9A706CCA1D26EAA72F8063B6E385",
                    PENDING_SWAP_FRONTIER,
                    CANCEL_ISSUER,
                    TESTER,
                    locked=True,
                )),
                # sent with send all assets, received, sent back and received by the issuer again
                frontier(SWEEP_ISSUER, _state(
                    "56A2251E0C20CE9B81269E1916858FB2FE178543FA2ED05522D66FC74EC6DD8D",
                    "D29F111B51E113F58A1805379CB880564402B6DC430B59DE4598E5A5ED36AF3A",
                    SWEEP_ISSUER,
                    verified=False,
                )),
                frontier(SWEEP_ISSUER, _state(
                    "A8748C3ABC82C1FC18CD2E9A2AB1AA13E5FCC88F71B1BEBF0C44BE7A520AD393",
                    PENDING_SWAP_FRONTIER,
                    CANCEL_ISSUER,
                    TESTER,
                    locked=True,
                )),
                # minted after the send all assets command, so never moved
                frontier(SWEEP_ISSUER, _unreceived(
                    "95C9F6EE6038C3DBD7450EC3435203FF3C623EEA8673B7E41077D3DBE875325C",
                    SWEEP_ISSUER,
                )),
            ),
        ),
        FetchCase(
            name=(
                "doesn't transfer ownership while send#atomic_swap and receive#atomic swap is confirmed "
                "but send#payment or #abort_payment isn't submitted on-chain"
            ),
            checks=(
                frontier(SWEEP_ISSUER, _state(
                    "9DBA255E5D311A5D519CF3B3D182E7120D8A94BCF450FFFB7C44FF9569B41CCF",
                    PENDING_SWAP_FRONTIER,
                    CANCEL_ISSUER,
                    TESTER,
                    locked=True,
                )),
            ),
        ),
        FetchCase(
            name="unreceived change#mint, send#asset is owned by recipient but not sendable",
            checks=(
                frontier(ISSUER, _state(
                    "88A047DA0CF8A07568D8E3BEC6030587988A11581906CBBF372DE32385F35F16",
                    "8B3CC30A16A578DAD88BF455B7646E99CAC5F2D51FC5615DD38C98E64A6F8F37",
                    RECIPIENT,
                )),
            ),
        ),
        FetchCase(
            name="unreceived send#mint is owned by recipient but not sendable",
            checks=(
                frontier(ISSUER, _unreceived(
                    "D051A922C775616CADC97EB29FD6D75AA514D05ABA4A1252F8B626C9C4F863E8",
                    RECIPIENT,
                    verified=False,
                )),
            ),
        ),
        FetchCase(
            name="is unable to send assets owned by someone else",
            checks=(
                frontier(ISSUER, _unreceived(
                    "777B8264AFDF004C77285CBBA7F208D2BB5A64118FBB5DCCA7D2619374CB3C4A",
                    ISSUER,
                    verified=False,
                )),
            ),
        ),
        FetchCase(
            name="ignores send#asset block for asset you have already sent with a send#mint block",
            checks=(
                # the later send#asset to RELAY must not count
                frontier(ISSUER, _unreceived(
                    "6F7ED78C5A40145EDCA76B63B1F525DC38A6A4597D59274FBEEED32619C8AF43",
                    RECIPIENT,
                )),
            ),
        ),
        FetchCase(
            name="traces chain of sends",
            checks=(
                frontier(ISSUER, _state(
                    "87F0D105A36BA43C87AF399B84B8BBF8EED0BDD71279AACC33496809D5E28B66",
                    "FB61B5787732E7C92945545B1D926BC6C04A4A5349ADE86A38AD65CF09D4B955",
                    RELAY,
                    verified=False,
                )),
            ),
        ),
        FetchCase(
            name="ignores send#asset before receive#asset and after previously confirmed send#asset",
            checks=(
                BlockCheck(
                    query=AssetQuery(
                        endpoint=AT_HEIGHT_ENDPOINT,
                        issuer=ISSUER,
                        mint_block_hash="68EB50EF45651590ECC6136D20BBC8D68ECF0C352FC50DBFEC00C3DB3F5F934D",
                        height=2,
                    ),
                    expected=_state(
                        "68EB50EF45651590ECC6136D20BBC8D68ECF0C352FC50DBFEC00C3DB3F5F934D",
                        "31C4279ACE505BFACE38BBE4883B1D928C7742BE0C042FF92C8D69C6C8D4B1E1",
                        TESTER,
                        verified=False,
                    ),
                ),
            ),
        ),
        FetchCase(
            name="confirms completed valid atomic swap",
            checks=(
                frontier(SWAP_ISSUER, _state(
                    "01C876EE1CB115E166BF96FB1218EE0107CF07B6F9FD62ED02A40062360DF20A",
                    "E8285EBCF17C5FD0DFDCE086253A72D4795032FB5E23F8D13880954D8BB8AE56",
                    SWAP_BUYER,
                )),
            ),
        ),
        SharedChainLengthCase(
            name="ignores invalid send#atomic_swap where encoded receive height is less than 2",
            expected_length=3,
            reason="Atomic swap blocks with receive height set to less than two should be ignored.",
        ),
        FetchCase(
            name="ignores invalid send#atomic_swap where exact raw amount sent isn't exactly 1 raw",
            checks=(
                # never was a valid send#atomic_swap
                frontier(CANCEL_ISSUER, _unreceived(
                    "3B8A04CC4D4219265AF0A5AC71B2340B025A58270FF3845F680FA95ABE1F58EE",
                    CANCEL_ISSUER,
                )),
                frontier(CANCEL_ISSUER, _unreceived(
                    "F08725F34398942CADE0BD9F151CFB71ECFCDC408B3D73A2072373CBF153D695",
                    CANCEL_ISSUER,
                )),
            ),
        ),
        SharedChainFrontierCase(
            name="cancels atomic swap if paying account balance is less than min raw in block at: receive height - 1",
            expected=_state(
                SHARED_CHAIN_QUERY.mint_block_hash,
                "F8BD752EDB490FC4B505ED878981240A79DB5C0490F7242388EF5E183E17EF29",
                SWAP_ISSUER,
            ),
        ),
        FetchCase(
            name="cancels atomic swap if receive#atomic_swap block has a different representative than previous block",
            checks=(
                # invalid receive (representative changed): CCBBB68F1C216C45F76C175BB2116F97080512C84D0A4830E0186DADFEF56921
                frontier(SWAP_ISSUER, _state(
                    "09ABEBF530CD96A30FA4F58B458AB7378DF6432CFC39040F6224195A006D65BA",
                    "2EEFFD2621E2260255F200131B3CAF3D25271076DB5E8AE856DCE8BBB2DC1875",
                    SWAP_ISSUER,
                )),
            ),
        ),
        FetchCase(
            name="cancels atomic swap if a block other than the relevant receive#atomic_swap is confirmed at receive_height",
            checks=(
                frontier(CANCEL_ISSUER, _state(
                    "050D2C75CE68241CF5E3CD180411A73A75A1781D5B2D5BAA26059A06811689A7",
                    "B6B01C3701CFE5C091FB6DC068075D7A567926C74C44B1BC6F0FAE3BD18A0F6B",
                    CANCEL_ISSUER,
                )),
            ),
        ),
        FetchCase(
            name="cancels atomic swap if a block other than send#payment follows receive#atomic_swap",
            checks=(
                frontier(CANCEL_ISSUER, _state(
                    "AE29A6AE92A3F78A49D6F1A82C014276FE95140963FCED2410A640A5173A1FC8",
                    "292A27AC9930DFAA00356AF1B78960A2FF785ABDD8999C2FB3D0F20C99A822A0",
                    CANCEL_ISSUER,
                )),
            ),
        ),
        FetchCase(
            name="cancels atomic swap if send#payment sends too little raw to the right account",
            checks=(
                frontier(CANCEL_ISSUER, _state(
                    "B0BB1D5000D4A9E51993968C25A27804FC5551CFB18656B9FD7444D70C496A11",
                    "1ACDBFDF725D5738CD6B6454464FA1313574C056626ECEFCA8C4B5D564F75338",
                    CANCEL_ISSUER,
                )),
            ),
        ),
        FetchCase(
            name="cancels atomic swap if send#payment sends enough raw to the wrong account",
            checks=(
                frontier(CANCEL_ISSUER, _state(
                    "32A3470B9217D796E16D2CE2445A5FC84F023695B099D2AE6B4B3133FF313CA6",
                    "A5FE789EF4C2E52EEFB31F3356581317FF5D1C8F9DEACDC4AE85EE8AB5D3E56A",
                    CANCEL_ISSUER,
                    verified=False,
                )),
            ),
        ),
    ]


def unverified_states(cases: Optional[List[DiagnosticCase]] = None) -> List[ExpectedAssetState]:
    out: List[ExpectedAssetState] = []
    for case in cases if cases is not None else default_catalog():
        for c in getattr(case, "checks", ()):
            if not c.expected.verified:
                out.append(c.expected)
    return out
