#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK
import argcomplete
import argparse

from argcomplete.completers import FilesCompleter, DirectoriesCompleter

from chainlotto.config_user import UserConfig
from chainlotto.utils.progress_printer import fail_print, success_print


def parse_config_doc():
    import textwrap
    from typing import get_type_hints
    __ucfg = UserConfig()

    docs = {}
    for name, prop in vars(UserConfig).items():
        if name.startswith('_') or not isinstance(prop, property):
            continue
        t = get_type_hints(prop.fget)['return']
        doc = prop.__doc__
        choices = None
        if hasattr(__ucfg, f'_{name}_values'):
            choices = getattr(__ucfg, f'_{name}_values')
        default_val = getattr(__ucfg, name)
        docs[name] = (
            f"type: {t}\n\n"
            f"{textwrap.dedent(doc).strip()}\n\n"
            f"Default value: {default_val}", t, default_val, choices)
    return docs


def parse_arguments(argv=None):
    class ShowSuppressedInHelpFormatter(argparse.RawTextHelpFormatter):
        def add_usage(self, usage, actions, groups, prefix=None):
            if usage is not argparse.SUPPRESS:
                actions = [action for action in actions if action.metavar != '<cfg_val>']
                args = usage, actions, groups, prefix
                self._add_item(self._format_usage, args)

    main_parser = argparse.ArgumentParser(prog='chainlotto')
    config_files = ('json', )

    msg = 'Path to local configuration file (defaults to "config.json" in cwd). ' \
          'This file (if it exists), overrides settings defined in the global configuration.'
    main_parser.add_argument('--config-file', default='config.json', metavar='<config_file>', help=msg).completer = FilesCompleter(config_files)

    # Shared 'config' parser
    config_parser = argparse.ArgumentParser(add_help=False)
    msg = 'These parameters can be used to override settings defined (and documented) in config_user.py'
    cfg_group = config_parser.add_argument_group(title='Configuration Options', description=msg)

    # Expose config_user.py options via command line arguments, they are supported in all parsers
    cfg_docs = parse_config_doc()

    def add_config_args(parser, arg_names):
        for name in arg_names:
            doc, t, defval, choices = cfg_docs[name]

            if t is bool:
                if defval:
                    parser.add_argument(f'--no-{name.replace("_", "-")}', dest=name, help=doc, action='store_false')
                else:
                    parser.add_argument(f'--{name.replace("_", "-")}', dest=name, help=doc, action='store_true')
            elif t is int or t is float:
                parser.add_argument(f'--{name.replace("_", "-")}', type=t, dest=name, metavar='<cfg_val>', help=doc)
            else:
                arg = parser.add_argument(f'--{name.replace("_", "-")}', dest=name, metavar='<cfg_val>', help=doc,
                                          choices=choices)
                if name.endswith('dir'):
                    arg.completer = DirectoriesCompleter()
    add_config_args(cfg_group, cfg_docs.keys())

    # Shared 'interact' parser
    interact_parser = argparse.ArgumentParser(add_help=False)
    interact_parser.add_argument('--log', action='store_true', help='enable logging')
    interact_parser.add_argument('--account', help='Sender blockchain address', metavar='<address>')

    subparsers = main_parser.add_subparsers(title='actions', dest='cmd', required=True)
    parents = [interact_parser, config_parser]

    # 'change-value' parser
    cv_parser = subparsers.add_parser('change-value', parents=parents, formatter_class=ShowSuppressedInHelpFormatter,
                                      help='Deploy a Lottery, store a value and read it back.')
    cv_parser.add_argument('--value', type=int, default=777, help='Value to store (default: 777)', metavar='<uint>')

    # 'get-info' parser
    gi_parser = subparsers.add_parser('get-info', parents=parents, formatter_class=ShowSuppressedInHelpFormatter,
                                      help='Deploy a lottery and print its address.')
    gi_parser.add_argument('--musicslayer', action='store_true',
                           help='Deploy a MusicslayerLottery (5 tickets, 0.01 ether each) instead of a Lottery')
    gi_parser.add_argument('--claimant', help='Address whose claimable balance is printed (only with --musicslayer)',
                           metavar='<address>')

    # 'play-lottery' parser
    pl_parser = subparsers.add_parser('play-lottery', parents=parents, formatter_class=ShowSuppressedInHelpFormatter,
                                      help='Register players in a Lottery and choose a winner.')
    pl_parser.add_argument('--players', nargs='+', help='Player addresses (the first one is registered twice)',
                           metavar='<address>')
    pl_parser.add_argument('--starting-balance', help='Ether sent along with the deployment', metavar='<ether>')
    pl_parser.add_argument('--fund-lottery', help='Ether to add to the lottery pool', metavar='<ether>')
    pl_parser.add_argument('--fund-contract', help='Ether to add to the contract balance', metavar='<ether>')
    pl_parser.add_argument('--end-lottery', action='store_true', help='Pay out the pool to the winner')
    pl_parser.add_argument('--toggle-enabled', action='store_true', help='Disable the contract, check that it rejects calls and re-enable it')
    pl_parser.add_argument('--call-missing-function', action='store_true',
                           help='Send a transaction for a function the contract does not declare')

    # 'buy-tickets' parser
    bt_parser = subparsers.add_parser('buy-tickets', parents=parents, formatter_class=ShowSuppressedInHelpFormatter,
                                      help='Deploy a MusicslayerLottery, buy tickets and withdraw funds.')
    bt_parser.add_argument('--tickets', type=int, default=1, help='Number of tickets to buy (default: 1)', metavar='<n>')
    bt_parser.add_argument('--remove-funds', type=int, default=5000,
                           help='Wei to withdraw from the contract afterwards (default: 5000)', metavar='<wei>')

    # 'run-function' parser
    rf_parser = subparsers.add_parser('run-function', parents=parents, formatter_class=ShowSuppressedInHelpFormatter,
                                      help='Deploy a contract and issue a single transaction.')
    rf_parser.add_argument('contract', help='Contract name', metavar='<contract>')
    rf_parser.add_argument('function', help='Function name', metavar='<function>')
    rf_parser.add_argument('function_args', nargs='*', help='Function arguments', metavar='<args>...')
    rf_parser.add_argument('--value', help='Ether sent along with the transaction', metavar='<ether>')

    # 'update-solc' parser
    subparsers.add_parser('update-solc', parents=[config_parser], formatter_class=ShowSuppressedInHelpFormatter,
                          help='Install the configured (or latest compatible) solc version.')

    # parse
    argcomplete.autocomplete(main_parser, always_complete_options=False)
    a = main_parser.parse_args(argv)
    return a


def _literal_args(cargs):
    from ast import literal_eval
    args = []
    for arg in cargs:
        try:
            val = literal_eval(arg)
        except (ValueError, SyntaxError):
            val = arg
        args.append(val)
    return args


def _run_script(a):
    from chainlotto.scripts import buy_tickets, change_value, get_info, play_lottery, run_function
    from chainlotto.transaction.runtime import Runtime
    from chainlotto.transaction.types import AddressValue
    from chainlotto.utils.helpers import parse_ether

    def ether(val):
        return None if val is None else parse_ether(val)

    client = Runtime.blockchain()
    if a.cmd == 'change-value':
        return change_value.run(client, change_value.ChangeValueParams(value=a.value))
    elif a.cmd == 'get-info':
        if a.musicslayer:
            params = get_info.MUSICSLAYER_INFO
            if a.claimant is not None:
                params = params._replace(claimant=AddressValue(a.claimant))
        else:
            params = get_info.GetInfoParams()
        return get_info.run(client, params)
    elif a.cmd == 'play-lottery':
        params = play_lottery.PlayLotteryParams(
            starting_balance=ether(a.starting_balance),
            lottery_funding=ether(a.fund_lottery),
            contract_funding=ether(a.fund_contract),
            end_lottery=a.end_lottery,
            toggle_enabled=a.toggle_enabled,
            call_missing_function=a.call_missing_function)
        if a.players:
            params = params._replace(players=tuple(AddressValue(p) for p in a.players))
        return play_lottery.run(client, params)
    elif a.cmd == 'buy-tickets':
        return buy_tickets.run(client, buy_tickets.BuyTicketsParams(tickets=a.tickets, remove_funds=a.remove_funds))
    elif a.cmd == 'run-function':
        params = run_function.RunFunctionParams(a.contract, a.function, tuple(_literal_args(a.function_args)),
                                                ether(a.value))
        return run_function.run(client, params)
    else:
        raise NotImplementedError(a.cmd)


def main(argv=None):
    # parse arguments
    a = parse_arguments(argv)

    from chainlotto import my_logging
    from chainlotto.config import cfg
    from chainlotto.errors.exceptions import ContractClientError, SolcException
    from chainlotto.my_logging.log_context import log_context

    # Load configuration files
    try:
        cfg.load_configuration_from_disk(a.config_file)
    except Exception as e:
        with fail_print():
            print(f"ERROR: Failed to load configuration files\n{e}")
        exit(2)

    # Support for overriding any user config setting via command line
    # The evaluation order for configuration loading is:
    # Default values in config.py -> Site config.json -> user config.json -> local config.json -> cmdline arguments
    # Settings defined at a later stage override setting values defined at an earlier stage
    override_dict = {}
    for name in vars(UserConfig):
        if name[0] != '_' and hasattr(a, name):
            val = getattr(a, name)
            if val is not None:
                override_dict[name] = val
    if getattr(a, 'account', None) is not None:
        override_dict['blockchain_default_account'] = a.account
    account = override_dict.get('blockchain_default_account')
    if isinstance(account, str) and account.isdigit():
        override_dict['blockchain_default_account'] = int(account)
    try:
        cfg.override_defaults(override_dict)
    except ValueError as e:
        with fail_print():
            print(f'ERROR: Invalid configuration\n{e}')
        exit(2)

    if a.cmd == 'update-solc':
        try:
            version = cfg.concrete_solc_version
        except (SolcException, ValueError) as e:
            with fail_print():
                print(f'ERROR: {e}')
            exit(2)
        with success_print():
            print(f'Using solc {version}')
        exit(0)

    # Enable logging
    if a.log:
        log_file = my_logging.get_log_file(filename=f'script_{a.cmd}', include_timestamp=True, label=None)
        my_logging.prepare_logger(log_file, silent=False)

    try:
        with log_context(a.cmd):
            _run_script(a)
    except ContractClientError as e:
        my_logging.error(f'{type(e).__name__}: {e.message}')
        with fail_print():
            print(f'ERROR:\n{e.report.to_json()}')
        exit(1)
    except ValueError as e:
        with fail_print():
            print(f'ERROR: Invalid argument\n{e}')
        exit(2)

    with success_print():
        print("Finished successfully")


if __name__ == '__main__':
    main()
